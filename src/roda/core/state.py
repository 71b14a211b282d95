"""
State machine for the spin engine.

States:
    IDLE: Wheel at rest, a new spin may start
    SPINNING: A spin session is animating; spin requests are ignored
"""

from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class SpinState(Enum):
    """Spin engine states."""
    IDLE = auto()
    SPINNING = auto()


class StateMachine:
    """
    Tracks the Idle/Spinning flag and validates transitions.

    There is no cancelled state: once SPINNING, the only way out is
    back to IDLE when the session completes.
    """

    VALID_TRANSITIONS: list[tuple[SpinState, SpinState]] = [
        (SpinState.IDLE, SpinState.SPINNING),
        (SpinState.SPINNING, SpinState.IDLE),
    ]

    def __init__(self, initial_state: SpinState = SpinState.IDLE) -> None:
        self._state = initial_state
        self._valid_transitions = set(self.VALID_TRANSITIONS)

    @property
    def state(self) -> SpinState:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: SpinState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: SpinState) -> bool:
        """
        Attempt to transition to a new state.

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.debug(
                f"Ignored transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state
        logger.debug(f"State transition: {old_state.name} -> {to_state.name}")

        return True
