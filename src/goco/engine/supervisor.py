"""
Engine supervisor - launches Godot with a game and keeps track of it.

At most one game runs at a time. The child is never waited on: the
supervisor keeps only what it needs to check liveness and to terminate
it from the home button.
"""

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional
import logging
import os
import shutil
import subprocess

import psutil

from ..config.settings import Settings
from ..library.game import Game
from ..utils.paths import is_file

logger = logging.getLogger(__name__)

# Flags passed to the engine before the package path
ENGINE_FLAGS = ("--fullscreen", "--always-on-top", "--main-pack")

_DEAD_STATUSES = frozenset({psutil.STATUS_ZOMBIE, psutil.STATUS_DEAD})


class LaunchStatus(Enum):
    STARTED = auto()
    BUSY = auto()
    ENGINE_NOT_FOUND = auto()
    GAME_NOT_FOUND = auto()
    SPAWN_FAILED = auto()


@dataclass
class LaunchResult:
    """Result of a launch request."""

    status: LaunchStatus
    process_id: Optional[int] = None
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == LaunchStatus.STARTED


class EngineSupervisor:
    """
    Owns the single engine child process.

    Liveness inspection can be disabled for platforms where the engine
    hands off to another process; the child is then assumed alive until
    kill() is called.
    """

    def __init__(self, executable: str = "godot", liveness_check: bool = True) -> None:
        self._executable = executable
        self._liveness_check = liveness_check
        self._process: Optional[subprocess.Popen] = None
        self._handle: Optional[psutil.Process] = None
        self._game: Optional[Game] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "EngineSupervisor":
        return cls(settings.godot_path, liveness_check=settings.engine_liveness)

    @property
    def executable(self) -> str:
        return self._executable

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    @property
    def current_game(self) -> Optional[Game]:
        return self._game

    def is_running(self) -> bool:
        return self._process is not None

    def resolve_executable(self) -> Optional[str]:
        """Find the engine as a file path, or as a bare name on PATH."""
        if is_file(Path(self._executable)):
            return self._executable
        if os.sep in self._executable:
            return None
        return shutil.which(self._executable)

    def build_command(self, executable: str, game: Game) -> list[str]:
        return [executable, *ENGINE_FLAGS, str(game.path)]

    def launch(self, game: Game) -> LaunchResult:
        """
        Start the engine with a game.

        Rejected while another game is tracked. A missing engine or
        package, or a failed spawn, leaves no child recorded.
        """
        if self._process is not None:
            message = f"{self._game} is already running (pid {self.pid})"
            logger.warning(f"Ignoring launch of {game}: {message}")
            return LaunchResult(LaunchStatus.BUSY, self.pid, message)

        executable = self.resolve_executable()
        if executable is None:
            message = f"Engine not found: {self._executable}"
            logger.error(message)
            return LaunchResult(LaunchStatus.ENGINE_NOT_FOUND, error_message=message)

        if not game.exists():
            message = f"Game package missing: {game.path}"
            logger.error(message)
            return LaunchResult(LaunchStatus.GAME_NOT_FOUND, error_message=message)

        command = self.build_command(executable, game)
        try:
            process = subprocess.Popen(command, stdin=subprocess.DEVNULL)
        except (OSError, ValueError) as e:
            message = f"Failed to load game {game}: {e}"
            logger.error(message)
            return LaunchResult(LaunchStatus.SPAWN_FAILED, error_message=message)

        self._process = process
        self._game = game
        self._handle = self._inspect(process.pid)
        logger.info(f"Launched {game} (pid {process.pid})")
        return LaunchResult(LaunchStatus.STARTED, process.pid)

    def _inspect(self, pid: int) -> Optional[psutil.Process]:
        """Attach psutil to the child and prime its CPU counter."""
        try:
            handle = psutil.Process(pid)
            handle.cpu_percent(interval=None)
        except psutil.Error as e:
            logger.debug(f"Cannot inspect pid {pid}: {e}")
            return None
        return handle

    def refresh_liveness(self) -> bool:
        """
        Forget the child if it has exited.

        The child counts as dead once a non-blocking wait reports an exit
        code, or when psutil shows it gone, a zombie, or idle (no CPU used
        since the last check). A just-exited pid can linger or be reused,
        so idleness is treated as death.

        Returns:
            Whether a game is still tracked
        """
        if self._process is None or not self._liveness_check:
            return self.is_running()

        returncode = self._process.poll()
        if returncode is not None:
            logger.info(f"{self._game} exited with code {returncode}")
            self._clear()
        elif self._is_idle_or_gone():
            logger.info(f"{self._game} (pid {self.pid}) is no longer active")
            self._clear()

        return self.is_running()

    def _is_idle_or_gone(self) -> bool:
        handle = self._handle
        if handle is None:
            return False
        try:
            if not handle.is_running():
                return True
            if handle.status() in _DEAD_STATUSES:
                return True
            return handle.cpu_percent(interval=None) == 0.0
        except psutil.NoSuchProcess:
            return True
        except psutil.AccessDenied as e:
            logger.debug(f"Liveness check denied for pid {self.pid}: {e}")
            return False

    def kill(self) -> bool:
        """
        Terminate the tracked game.

        Returns:
            True if a child was tracked and a kill was attempted
        """
        if self._process is None:
            return False

        pid = self.pid
        try:
            if self._handle is not None:
                self._handle.terminate()
            else:
                self._process.terminate()
            logger.info(f"Sent terminate to {self._game} (pid {pid})")
        except psutil.NoSuchProcess:
            logger.info(f"{self._game} (pid {pid}) had already exited")
        except (psutil.Error, OSError) as e:
            logger.error(f"Failed to kill pid {pid}: {e}")
        finally:
            self._clear()
        return True

    def _clear(self) -> None:
        self._process = None
        self._handle = None
        self._game = None
