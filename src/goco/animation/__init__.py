"""Animation module for GOCO."""

from .idle import IMAGE_FRAMES, PROMPT_TEXT, TEXT_FRAMES, InsertPrompt

__all__ = ["IMAGE_FRAMES", "PROMPT_TEXT", "TEXT_FRAMES", "InsertPrompt"]
