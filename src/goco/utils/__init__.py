"""Utility modules for GOCO."""

from .paths import is_dir, is_file, path_exists
from .system import spawn_detached

__all__ = ["is_dir", "is_file", "path_exists", "spawn_detached"]
