"""
Lifecycle state machine for the GOCO session.

States:
    REQUESTING: No GAMESTICK loaded, library empty, prompt animating
    LOADING: GAMESTICK loaded, library active (possibly with no games)
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Session lifecycle states."""
    REQUESTING = auto()
    LOADING = auto()


Listener = Callable[[State, State], None]


class StateMachine:
    """
    Owns the lifecycle state and validates transitions.

    Transitions are the only way the lifecycle changes; listeners are
    told about each one after it happens.
    """

    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.REQUESTING, State.LOADING),
        (State.LOADING, State.REQUESTING),
    ]

    def __init__(self, initial_state: State = State.REQUESTING) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Reset state machine to REQUESTING."""
        old_state = self._state
        self._state = State.REQUESTING
        if old_state != State.REQUESTING:
            self._notify(old_state, State.REQUESTING)
        logger.info("StateMachine reset to REQUESTING")

    def _notify(self, old_state: State, new_state: State) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
