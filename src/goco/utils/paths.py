"""
Filesystem checks that never raise.

Removable media can deny access (a parent mounted 0750 for another user)
or vanish mid-call. For these checks any OSError means "not there".
"""

from pathlib import Path
import stat


def _mode(path: Path) -> int | None:
    try:
        return path.stat().st_mode
    except OSError:
        return None


def path_exists(path: Path) -> bool:
    return _mode(path) is not None


def is_file(path: Path) -> bool:
    mode = _mode(path)
    return mode is not None and stat.S_ISREG(mode)


def is_dir(path: Path) -> bool:
    mode = _mode(path)
    return mode is not None and stat.S_ISDIR(mode)
