"""Exception types raised by GOCO components."""


class GocoError(Exception):
    """Base class for all GOCO errors."""


class UnsupportedPlatformError(GocoError):
    """The host platform has no known GAMESTICK mount location."""

    def __init__(self, platform: str) -> None:
        super().__init__(f"unsupported operating system: {platform}")
        self.platform = platform


class IoConfigurationError(GocoError):
    """GPIO pins could not be bound to their hardware modes."""


class InvalidGamePackage(GocoError, ValueError):
    """A path does not point at a usable game package."""

    def __init__(self, path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class DisplayInitError(GocoError):
    """The window, timers or keyboard could not be set up."""
