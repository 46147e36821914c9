"""Idle prompt shown while waiting for a GAMESTICK."""

from pathlib import Path

PROMPT_TEXT = "Please Insert GAMESTICK"

TEXT_FRAMES = 4
IMAGE_FRAMES = 2


class InsertPrompt:
    """
    Frame selector for the "Please Insert GAMESTICK" prompt.

    The text grows a trailing ellipsis one dot per frame and wraps.
    Image frames live in ``<assets>/a1.png`` and ``<assets>/a2.png``.
    """

    def __init__(self, assets_path: Path = Path("assets")) -> None:
        self._assets_path = assets_path
        self._text_index = 0
        self._image_index = 0

    @property
    def frame(self) -> int:
        return self._text_index

    @property
    def image_frame(self) -> int:
        return self._image_index

    @property
    def text(self) -> str:
        if self._text_index == 0:
            return PROMPT_TEXT
        return PROMPT_TEXT + " ." * self._text_index

    @property
    def image_path(self) -> Path:
        return self._assets_path / f"a{self._image_index + 1}.png"

    def advance(self) -> None:
        """Move to the next frame, replaying from the start after the last."""
        self._text_index = (self._text_index + 1) % TEXT_FRAMES
        self._image_index = 0

    def reset(self) -> None:
        self._text_index = 0
        self._image_index = 0
