"""
Session controller - the console's main state machine.

Ties together the GAMESTICK volume, the game library, the engine
supervisor and the physical I/O. All methods run on the main loop; the
only cross-thread traffic is the button flags inside the I/O interface.

Lifecycle:
    REQUESTING --(stick present and readable)--> LOADING
    LOADING --(stick removed or ejected)--> REQUESTING
"""

from pathlib import Path
from typing import Optional
import logging

from ..animation.idle import InsertPrompt
from ..config.settings import Settings
from ..core.events import Event, EventBus, EventType
from ..core.state import State, StateMachine
from ..engine.supervisor import EngineSupervisor, LaunchResult
from ..hardware.base import Button, IoInterface
from ..library.game import Game
from ..library.scanner import scan
from ..library.volume import VolumeLocator
from ..utils.system import spawn_detached

logger = logging.getLogger(__name__)

Nearby = tuple[Optional[Game], Optional[Game], Optional[Game]]


class SessionController:
    """
    Owns the lifecycle, the loaded library and the selection.

    Reacts to the periodic scan tick, the periodic I/O tick and discrete
    input (keyboard or buttons). Failures are logged and leave the
    session in its last good state; the next tick re-evaluates.
    """

    def __init__(
        self,
        settings: Settings,
        volume: VolumeLocator,
        engine: EngineSupervisor,
        io: IoInterface,
        event_bus: EventBus | None = None,
        state_machine: StateMachine | None = None,
    ) -> None:
        self._volume = volume
        self._engine = engine
        self._io = io
        self.event_bus = event_bus or EventBus()
        self.state_machine = state_machine or StateMachine()
        self._power_command = list(settings.power_command)
        self._prompt = InsertPrompt(settings.assets_path)

        self._library: tuple[Game, ...] = ()
        self._selection = 0

        # Raises UnsupportedPlatformError, which is fatal at startup
        self._volume_path = volume.locate()
        logger.info(f"Watching for GAMESTICK at {self._volume_path}")

        self.state_machine.add_listener(self._on_state_changed)

        if self._volume.exists(self._volume_path):
            self.initialize_library()

    # === State ===

    @property
    def lifecycle(self) -> State:
        return self.state_machine.state

    @property
    def library(self) -> tuple[Game, ...]:
        return self._library

    @property
    def selection_index(self) -> int:
        return self._selection

    @property
    def selected_game(self) -> Optional[Game]:
        if self.lifecycle != State.LOADING or not self._library:
            return None
        return self._library[self._selection]

    @property
    def volume_path(self) -> Path:
        return self._volume_path

    @property
    def prompt(self) -> InsertPrompt:
        """Idle animation shown while requesting a GAMESTICK."""
        return self._prompt

    @property
    def io(self) -> IoInterface:
        return self._io

    @property
    def engine(self) -> EngineSupervisor:
        return self._engine

    def get_nearby(self) -> Nearby:
        """Return the games before, at and after the selection."""
        if self.lifecycle != State.LOADING or not self._library:
            return (None, None, None)

        def at(index: int) -> Optional[Game]:
            if 0 <= index < len(self._library):
                return self._library[index]
            return None

        i = self._selection
        return (at(i - 1), at(i), at(i + 1))

    # === Ticks ===

    def on_scan_tick(self) -> None:
        """Periodic check for the GAMESTICK arriving or leaving."""
        present = self._volume.exists(self._volume_path)

        if self.lifecycle == State.REQUESTING:
            if present:
                self.initialize_library()
            else:
                self._prompt.advance()
                self._emit(EventType.PROMPT_FRAME, {
                    "frame": self._prompt.frame,
                    "text": self._prompt.text,
                })
        elif not present:
            logger.info("GAMESTICK removed")
            self.unload()

        self._engine.refresh_liveness()

    def on_io_tick(self) -> None:
        """Refresh indicator LEDs and act on button presses."""
        self._io.set_volume_present(self._volume.exists(self._volume_path))
        self._io.set_power_status(True)

        if self._io.poll_and_clear(Button.EJECT):
            logger.info("Eject button pressed")
            self.request_eject()
        if self._io.poll_and_clear(Button.HOME):
            logger.info("Home button pressed")
            self.request_home()
        if self._io.poll_and_clear(Button.POWER):
            logger.info("Power button pressed")
            self.request_power()

    # === Library ===

    def initialize_library(self) -> bool:
        """
        Load the library from the GAMESTICK.

        Aborts while the volume exists but cannot be listed yet (still
        mounting). An empty but readable stick loads an empty library.

        Returns:
            True if the session entered LOADING
        """
        if self.lifecycle != State.REQUESTING:
            logger.debug("Library already loaded")
            return False

        if not self._volume.readable(self._volume_path):
            logger.info(f"GAMESTICK at {self._volume_path} is not readable yet")
            return False

        self._library = tuple(scan(self._volume_path))
        self._selection = 0
        self._prompt.reset()
        self.state_machine.transition(State.LOADING)

        logger.info(f"Loaded {len(self._library)} games from GAMESTICK")
        self._emit(EventType.LIBRARY_LOADED, {
            "path": str(self._volume_path),
            "games": [game.name for game in self._library],
        })
        return True

    def unload(self) -> None:
        """Drop the library and go back to requesting a GAMESTICK."""
        if self.lifecycle != State.LOADING:
            return

        self._library = ()
        self._selection = 0
        self.state_machine.transition(State.REQUESTING)
        self._emit(EventType.LIBRARY_UNLOADED)

    # === Selection ===

    def select_next(self) -> bool:
        if self.lifecycle != State.LOADING:
            return False
        # cap at len - 1
        if self._selection + 1 < len(self._library):
            self._selection += 1
            self._selection_changed()
            return True
        return False

    def select_previous(self) -> bool:
        if self.lifecycle != State.LOADING:
            return False
        # cap at 0
        if self._selection >= 1:
            self._selection -= 1
            self._selection_changed()
            return True
        return False

    def _selection_changed(self) -> None:
        game = self.selected_game
        logger.debug(f"Selected {game} ({self._selection})")
        self._emit(EventType.SELECTION_CHANGED, {
            "index": self._selection,
            "game": game.name if game else None,
        })

    # === Commands ===

    def launch_selected(self) -> Optional[LaunchResult]:
        """Start the selected game in the engine."""
        game = self.selected_game
        if game is None:
            logger.debug("No game selected")
            return None

        self._engine.refresh_liveness()
        result = self._engine.launch(game)

        if result.success:
            self._emit(EventType.GAME_LAUNCHED, {
                "game": game.name,
                "pid": result.process_id,
            })
        else:
            self._emit(EventType.LAUNCH_FAILED, {
                "game": game.name,
                "status": result.status.name,
                "error": result.error_message,
            })
        return result

    def request_eject(self) -> bool:
        """Unmount the GAMESTICK and unload the library."""
        if not self._volume.eject(self._volume_path):
            logger.warning("GAMESTICK eject failed")
            self._emit(EventType.EJECT_FAILED, {"path": str(self._volume_path)})
            return False

        logger.info("GAMESTICK ejected")
        self.unload()
        return True

    def request_home(self) -> bool:
        """Return to the library by killing the running game."""
        if not self._engine.kill():
            logger.debug("No game running")
            return False

        self._emit(EventType.GAME_KILLED)
        return True

    def request_power(self) -> bool:
        """
        Power the console down.

        The power LED goes dark first; if the shutdown command cannot be
        started it is lit again so it never misreports the machine state.
        """
        logger.warning("=== SYSTEM SHUTDOWN INITIATED ===")
        self._io.set_power_status(False)

        if spawn_detached(self._power_command):
            self._emit(EventType.POWER_OFF)
            return True

        self._io.set_power_status(True)
        self._emit(EventType.POWER_OFF_FAILED)
        return False

    # === Events ===

    def _on_state_changed(self, old_state: State, new_state: State) -> None:
        self._emit(EventType.STATE_CHANGED, {
            "from": old_state.name,
            "to": new_state.name,
        })

    def _emit(self, event_type: EventType, data: dict | None = None) -> None:
        self.event_bus.emit(Event(event_type, data=data or {}, source="session"))
