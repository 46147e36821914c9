from __future__ import annotations

import errno
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from goco.config.settings import HardwareSettings, Settings
from goco.core.events import Event, EventBus
from goco.engine.supervisor import LaunchResult, LaunchStatus
from goco.hardware.inert import InertInterface
from goco.library.game import Game
from goco.library.volume import VolumeLocator
from goco.session.controller import SessionController


def make_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class RecordingEngine:
    """Engine supervisor stand-in that records what the controller asks of it."""

    def __init__(self) -> None:
        self.launched: list[Game] = []
        self.kills = 0
        self.liveness_checks = 0
        self.running = False

    def launch(self, game: Game) -> LaunchResult:
        if self.running:
            return LaunchResult(LaunchStatus.BUSY, 100, "busy")
        self.launched.append(game)
        self.running = True
        return LaunchResult(LaunchStatus.STARTED, 100)

    def is_running(self) -> bool:
        return self.running

    def refresh_liveness(self) -> bool:
        self.liveness_checks += 1
        return self.running

    def kill(self) -> bool:
        if not self.running:
            return False
        self.kills += 1
        self.running = False
        return True


@pytest.fixture()
def deny_access(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path], None]:
    """Make stat() fail with EACCES for a directory and everything below it."""
    locked: list[Path] = []
    real_stat = Path.stat

    def guarded_stat(self: Path, *args, **kwargs):
        if any(self == d or d in self.parents for d in locked):
            raise PermissionError(errno.EACCES, "Permission denied", str(self))
        return real_stat(self, *args, **kwargs)

    monkeypatch.setattr(Path, "stat", guarded_stat)
    return locked.append


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        env="simulator",
        root=tmp_path / "goco",
        media_root=tmp_path,
        volumes_root=tmp_path,
        volume_label="GAMESTICK",
        liveness_check=False,
        power_command=[str(tmp_path / "no-such-shutdown")],
        hardware=HardwareSettings(_env_file=None, bounce_time=None),
    )


@pytest.fixture()
def stick_path(tmp_path: Path) -> Path:
    """Mount point of the GAMESTICK (not created)."""
    return tmp_path / "GAMESTICK"


@pytest.fixture()
def volume(settings: Settings) -> VolumeLocator:
    # darwin layout keeps the mount point at <volumes_root>/GAMESTICK
    return VolumeLocator(settings, platform="darwin")


@pytest.fixture()
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture()
def io() -> Generator[InertInterface, None, None]:
    interface = InertInterface()
    yield interface
    interface.close()


@pytest.fixture()
def events() -> tuple[EventBus, list[Event]]:
    bus = EventBus()
    received: list[Event] = []
    bus.subscribe_all(received.append)
    return bus, received


@pytest.fixture()
def make_controller(
    settings: Settings,
    volume: VolumeLocator,
    engine: RecordingEngine,
    io: InertInterface,
    events: tuple[EventBus, list[Event]],
) -> Callable[[], SessionController]:
    bus, _ = events

    def _make() -> SessionController:
        return SessionController(
            settings=settings,
            volume=volume,
            engine=engine,  # type: ignore[arg-type]
            io=io,
            event_bus=bus,
        )

    return _make
