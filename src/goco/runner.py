"""
Main loop for GOCO.

Owns the pygame window, the two periodic timers (GAMESTICK scan and
I/O refresh) and the keyboard. Every timer tick and key press is handed
to the session controller one at a time on this loop.
"""

import asyncio
import logging
from typing import Callable

from .config.settings import Settings
from .core.events import Event, EventType
from .core.state import State
from .errors import DisplayInitError
from .session.controller import SessionController

logger = logging.getLogger(__name__)

WINDOW_TITLE = "GOCO"
WINDOWED_SIZE = (1280, 720)

# Pygame is used for the window, timers and keyboard
_pygame = None


def _get_pygame():
    """Lazy import pygame."""
    global _pygame
    if _pygame is None:
        import pygame
        _pygame = pygame
    return _pygame


class Runner:
    """
    Cooperative event loop around the session controller.

    Keyboard:
        D / RIGHT          next game
        A / LEFT           previous game
        SPACE / RETURN     play selected game
        E                  eject GAMESTICK
        H / BACKSPACE      home (quit running game)
        P                  power off (hardware builds only)
        ESCAPE / Q         exit GOCO
    """

    def __init__(self, settings: Settings, controller: SessionController) -> None:
        self.settings = settings
        self.controller = controller

        self._running = False
        self._initialized = False
        self._clock = None
        self._screen = None
        self._scan_event = None
        self._io_event = None
        self._keymap: dict[int, Callable[[], object]] = {}
        self._unsubscribe: Callable[[], None] | None = None

    def init(self) -> bool:
        """Open the window and start the timers."""
        if self._initialized:
            return True

        try:
            pygame = _get_pygame()
            pygame.init()

            if self.settings.fullscreen:
                self._screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            else:
                self._screen = pygame.display.set_mode(WINDOWED_SIZE)
            self._clock = pygame.time.Clock()

            self._scan_event = pygame.event.custom_type()
            self._io_event = pygame.event.custom_type()
            pygame.time.set_timer(self._scan_event, int(self.settings.scan_interval * 1000))
            pygame.time.set_timer(self._io_event, int(self.settings.io_interval * 1000))

            logger.info(f"Pygame initialized (driver: {pygame.display.get_driver()})")
        except Exception as e:
            logger.error(f"Pygame init error: {e}")
            return False

        self._keymap = self._build_keymap()
        self._unsubscribe = self.controller.event_bus.subscribe_all(self._on_session_event)
        self._update_caption()

        self._initialized = True
        return True

    def _build_keymap(self) -> dict[int, Callable[[], object]]:
        pygame = _get_pygame()
        c = self.controller
        keymap = {
            pygame.K_d: c.select_next,
            pygame.K_RIGHT: c.select_next,
            pygame.K_a: c.select_previous,
            pygame.K_LEFT: c.select_previous,
            pygame.K_SPACE: c.launch_selected,
            pygame.K_RETURN: c.launch_selected,
            pygame.K_e: c.request_eject,
            pygame.K_h: c.request_home,
            pygame.K_BACKSPACE: c.request_home,
        }
        # Power-off key only on the console itself
        if self.settings.is_hardware:
            keymap[pygame.K_p] = c.request_power
        return keymap

    def _handle_events(self) -> None:
        """Process pygame events: timers, keyboard and window close."""
        pygame = _get_pygame()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == self._scan_event:
                self.controller.on_scan_tick()
            elif event.type == self._io_event:
                self.controller.on_io_tick()
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key: int) -> None:
        """Dispatch a key press to the controller."""
        pygame = _get_pygame()

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
            return

        action = self._keymap.get(key)
        if action is not None:
            action()

    def _on_session_event(self, event: Event) -> None:
        if event.type in (
            EventType.STATE_CHANGED,
            EventType.SELECTION_CHANGED,
            EventType.PROMPT_FRAME,
            EventType.LIBRARY_LOADED,
        ):
            self._update_caption()

    def caption(self) -> str:
        """Window caption for the current session state."""
        c = self.controller
        if c.lifecycle == State.REQUESTING:
            return f"{WINDOW_TITLE} - {c.prompt.text}"
        game = c.selected_game
        if game is None:
            return f"{WINDOW_TITLE} - No games on GAMESTICK"
        return f"{WINDOW_TITLE} - {game.name} ({c.selection_index + 1}/{len(c.library)})"

    def _update_caption(self) -> None:
        if self._screen is None:
            return
        _get_pygame().display.set_caption(self.caption())

    async def run(self) -> None:
        """Main loop."""
        if not self._initialized:
            if not self.init():
                raise DisplayInitError("Runner initialization failed")

        self._running = True
        logger.info("Runner started")

        try:
            while self._running:
                self._handle_events()

                self._screen.fill((0, 0, 0))
                _get_pygame().display.flip()

                self._clock.tick(self.settings.fps)

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def stop(self) -> None:
        """Stop the runner."""
        self._running = False

    def _cleanup(self) -> None:
        logger.info("Cleaning up...")

        self.controller.event_bus.emit(Event(EventType.SHUTDOWN, source="runner"))
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        self.controller.io.close()

        pygame = _get_pygame()
        pygame.time.set_timer(self._scan_event, 0)
        pygame.time.set_timer(self._io_event, 0)
        pygame.quit()
        self._initialized = False

        logger.info("Cleanup complete")
