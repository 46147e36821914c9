"""Helpers for issuing OS commands without waiting on them."""

from typing import Sequence
import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def spawn_detached(command: Sequence[str | os.PathLike]) -> bool:
    """
    Start a command and return immediately.

    The process is not waited on; its outcome is outside the caller's
    control. Only failure to start it is reported.

    Returns:
        True if the process was spawned, False otherwise
    """
    args = [os.fspath(arg) for arg in command]
    try:
        subprocess.Popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        logger.error(f"Failed to run {' '.join(args)}: {e}")
        return False

    logger.info(f"Executing: {' '.join(args)}")
    return True
