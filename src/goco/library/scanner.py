"""
Library scanner for the GAMESTICK.

Walks the volume for game packages at any depth. Hidden entries are
skipped, matching shell glob semantics, which also keeps macOS
AppleDouble files (``._game.pck``) out of the library.
"""

from pathlib import Path
import logging
import os

from ..errors import InvalidGamePackage
from ..utils.paths import is_dir
from .game import GAME_EXT, Game

logger = logging.getLogger(__name__)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def scan(root: Path | str) -> list[Game]:
    """
    Discover every game package under root.

    Unreadable directories and invalid entries are skipped with a
    warning; they never abort the scan.

    Returns:
        Games in discovery order, empty if root is missing or has none
    """
    root = Path(root)
    if not is_dir(root):
        logger.debug(f"Library root not found: {root}")
        return []

    def on_error(error: OSError) -> None:
        logger.warning(f"Skipping unreadable entry {error.filename}: {error.strerror}")

    suffix = f".{GAME_EXT}"
    games: list[Game] = []

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        # Prune in place so os.walk does not descend into hidden folders
        dirnames[:] = sorted(d for d in dirnames if not _is_hidden(d))

        candidates = [
            name for name in dirnames + filenames
            if name.endswith(suffix) and not _is_hidden(name)
        ]
        for name in sorted(candidates):
            try:
                games.append(Game.discover(Path(dirpath) / name))
            except InvalidGamePackage as e:
                logger.warning(f"Skipping invalid game package {e}")
            except OSError as e:
                logger.warning(f"Skipping unreadable game package {name}: {e}")

    logger.info(f"Found {len(games)} games under {root}")
    return games
