"""Shared types and enums for the debate engine."""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .events import DebateEvent


class SessionStatus(Enum):
    """Lifecycle states of a debate session."""

    CREATED = "created"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.COMPLETED, SessionStatus.CANCELLED)


class Stance(Enum):
    """Debate stances."""

    PRO = "pro"
    CON = "con"


class Winner(Enum):
    """Outcome of the judging phase."""

    PRO = "pro"
    CON = "con"
    TIE = "tie"


# Legal status transitions; anything else is rejected by the engine.
ALLOWED_TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.CREATED: frozenset({SessionStatus.RUNNING}),
    SessionStatus.RUNNING: frozenset(
        {SessionStatus.PAUSED, SessionStatus.COMPLETED, SessionStatus.CANCELLED}
    ),
    SessionStatus.PAUSED: frozenset(
        {SessionStatus.RUNNING, SessionStatus.COMPLETED, SessionStatus.CANCELLED}
    ),
    SessionStatus.COMPLETED: frozenset(),
    SessionStatus.CANCELLED: frozenset(),
}


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    """Return True if the state machine allows moving from current to target."""
    return target in ALLOWED_TRANSITIONS[current]


# Callback type alias for engine events
type EventCallback = Callable[[str, "DebateEvent"], Awaitable[None]]
