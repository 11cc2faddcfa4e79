"""WebSocket Connection State Machine.

Implements the client connection lifecycle:

States:
    DISCONNECTED → CONNECTING → OPEN
    CONNECTING | OPEN → DISCONNECTED

There is no terminal state: the watchdog keeps cycling the machine for as long
as the client runs.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from chatbot_client.domain.enums import ConnectionState

log = logging.getLogger(__name__)


# Valid state transitions
_VALID_TRANSITIONS: dict[ConnectionState, set[ConnectionState]] = {
    ConnectionState.DISCONNECTED: {ConnectionState.CONNECTING},
    ConnectionState.CONNECTING: {ConnectionState.OPEN, ConnectionState.DISCONNECTED},
    ConnectionState.OPEN: {ConnectionState.DISCONNECTED},
}

_HISTORY_LIMIT = 100


@dataclass
class StateTransition:
    """Record of a state transition."""

    from_state: ConnectionState
    to_state: ConnectionState
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    reason: str | None = None


class ConnectionStateMachine:
    """State machine for the backend connection lifecycle.

    Keeps a bounded transition history for debugging. The ConnectionManager is
    the only caller; it runs on a single event loop so no locking is done here.
    """

    def __init__(self, initial_state: ConnectionState = ConnectionState.DISCONNECTED):
        """Initialize the state machine.

        Args:
            initial_state: The starting state (default: DISCONNECTED)
        """
        self._state = initial_state
        self._history: list[StateTransition] = []
        log.debug(f"State machine initialized in state: {initial_state.value}")

    @property
    def state(self) -> ConnectionState:
        """Get the current state."""
        return self._state

    @property
    def history(self) -> list[StateTransition]:
        """Get the transition history."""
        return self._history.copy()

    @property
    def is_open(self) -> bool:
        return self._state == ConnectionState.OPEN

    @property
    def is_idle(self) -> bool:
        """Check if no connection attempt is open or in flight."""
        return self._state == ConnectionState.DISCONNECTED

    def can_transition_to(self, new_state: ConnectionState) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            new_state: The target state

        Returns:
            True if the transition is valid, False otherwise
        """
        return new_state in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, new_state: ConnectionState, reason: str | None = None) -> bool:
        """Attempt to transition to a new state.

        Args:
            new_state: The target state
            reason: Optional reason for the transition

        Returns:
            True if the transition succeeded, False if it was invalid
        """
        if not self.can_transition_to(new_state):
            log.warning(f"Invalid state transition: {self._state.value} → {new_state.value} (valid targets: {[s.value for s in _VALID_TRANSITIONS.get(self._state, set())]})")
            return False

        old_state = self._state
        self._state = new_state
        self._history.append(StateTransition(from_state=old_state, to_state=new_state, reason=reason))
        if len(self._history) > _HISTORY_LIMIT:
            del self._history[0]

        log.debug(f"State transition: {old_state.value} → {new_state.value}" + (f" (reason: {reason})" if reason else ""))
        return True

    def __repr__(self) -> str:
        return f"ConnectionStateMachine(state={self._state.value}, transitions={len(self._history)})"
