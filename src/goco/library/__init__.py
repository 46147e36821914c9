"""GAMESTICK volume and game library."""

from .game import GAME_EXT, ICON_EXT, Game
from .scanner import scan
from .volume import VolumeLocator

__all__ = ["GAME_EXT", "ICON_EXT", "Game", "VolumeLocator", "scan"]
