"""A single game package found on the GAMESTICK."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import InvalidGamePackage
from ..utils.paths import is_file

# Godot exported main pack
GAME_EXT = "pck"
# Optional cover image stored beside the package
ICON_EXT = "png"


@dataclass(frozen=True)
class Game:
    """
    One discovered game package.

    The package path is checked once, when the game is discovered. The
    icon is looked up on every access so a cover added or removed later
    is reflected immediately.
    """

    path: Path

    @classmethod
    def discover(cls, path: Path | str) -> "Game":
        """
        Build a Game from a package path found during a scan.

        Raises:
            InvalidGamePackage: if the path has the wrong extension or is
                not an existing regular file
        """
        path = Path(path)
        if path.suffix != f".{GAME_EXT}":
            raise InvalidGamePackage(path, f"not a .{GAME_EXT} file")
        if not is_file(path):
            raise InvalidGamePackage(path, "not a regular file")
        return cls(path)

    @property
    def name(self) -> str:
        """File name without the package extension."""
        return self.path.stem

    @property
    def icon_path(self) -> Optional[Path]:
        icon = self.path.with_suffix(f".{ICON_EXT}")
        return icon if is_file(icon) else None

    def exists(self) -> bool:
        """Check the package is still on disk."""
        return is_file(self.path)

    def __str__(self) -> str:
        return self.name
