"""Errors raised by the debate engine."""

from models.providers.exceptions import ConfigurationError, ProviderError

from .types import SessionStatus


class DebateError(Exception):
    """Base class for engine errors surfaced to callers."""


class SessionNotFoundError(DebateError):
    """The requested debate session does not exist."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Debate session {session_id} not found")


class EngineStateError(DebateError):
    """An operation is not valid for the session's current status."""

    def __init__(self, operation: str, status: SessionStatus):
        self.operation = operation
        self.status = status
        super().__init__(f"Cannot {operation} a debate that is {status.value}")


class InternalError(DebateError):
    """Unexpected failure inside a debate run; the run is cancelled."""


__all__ = [
    "ConfigurationError",
    "DebateError",
    "EngineStateError",
    "InternalError",
    "ProviderError",
    "SessionNotFoundError",
]
