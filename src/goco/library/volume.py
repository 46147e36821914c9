"""
GAMESTICK volume location and control.

The volume is expected at a fixed, platform-specific mount path. Its
presence and readability are always checked live against the
filesystem; nothing here caches them.
"""

from pathlib import Path
from typing import Optional
import logging
import os
import sys

from ..config.settings import Settings
from ..errors import UnsupportedPlatformError
from ..utils.paths import path_exists
from ..utils.system import spawn_detached

logger = logging.getLogger(__name__)


def _home_username() -> Optional[str]:
    try:
        name = Path.home().name
    except (RuntimeError, KeyError):
        return None
    return name or None


class VolumeLocator:
    """Finds, inspects and ejects the GAMESTICK."""

    def __init__(self, settings: Settings, platform: Optional[str] = None) -> None:
        self._media_root = settings.media_root
        self._volumes_root = settings.volumes_root
        self._label = settings.volume_label
        self._platform = platform or sys.platform

    @property
    def platform(self) -> str:
        return self._platform

    def locate(self) -> Path:
        """
        Return where the GAMESTICK mounts on this platform.

        Linux automounts removable media under the desktop user's name;
        macOS mounts every volume under /Volumes.

        Raises:
            UnsupportedPlatformError: on any other platform
        """
        if self._platform.startswith("linux"):
            user = _home_username()
            if user is None:
                return self._media_root / self._label
            return self._media_root / user / self._label
        if self._platform == "darwin":
            return self._volumes_root / self._label
        raise UnsupportedPlatformError(self._platform)

    @staticmethod
    def exists(path: Path) -> bool:
        """Permission denied on the mount path counts as absent."""
        return path_exists(path)

    @staticmethod
    def readable(path: Path) -> bool:
        """
        Check the directory can be listed right now.

        A freshly inserted stick can exist before it is mounted far
        enough to read, and permissions can deny listing.
        """
        try:
            with os.scandir(path) as entries:
                next(entries, None)
        except OSError as e:
            logger.debug(f"Volume {path} not readable: {e}")
            return False
        return True

    def eject_command(self, path: Path) -> Optional[list[str]]:
        if self._platform == "darwin":
            return ["diskutil", "unmount", str(path)]
        if self._platform.startswith("linux"):
            return ["umount", str(path)]
        return None

    def eject(self, path: Path) -> bool:
        """
        Ask the OS to unmount the volume.

        Returns:
            True if the unmount command was started. The unmount itself
            completes (or fails) asynchronously.
        """
        if not self.exists(path):
            logger.info(f"Nothing to eject at {path}")
            return False

        command = self.eject_command(path)
        if command is None:
            logger.warning(f"Eject is not supported on {self._platform}")
            return False

        return spawn_detached(command)
