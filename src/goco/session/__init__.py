"""Session control for GOCO."""

from .controller import SessionController

__all__ = ["SessionController"]
