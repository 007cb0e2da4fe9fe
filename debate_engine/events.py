"""Outbound events published by the engine to observers.

The vocabulary is closed: every event is one of the models below and is
discriminated by its ``type`` field on the wire.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .models import DebateMessage, DebateResult


class MessagePayload(BaseModel):
    """Serialized form of a debate message."""

    id: str
    session_id: str
    participant_id: str
    participant_name: str | None = None
    stance: str | None = None
    round: int
    turn: int
    content: str
    word_count: int
    timestamp: datetime

    @classmethod
    def from_message(cls, message: DebateMessage) -> "MessagePayload":
        return cls(**message.to_dict())


class StatusChangedEvent(BaseModel):
    type: Literal["status_changed"] = "status_changed"
    session_id: str
    status: str


class TurnGeneratedEvent(BaseModel):
    type: Literal["turn_generated"] = "turn_generated"
    session_id: str
    message: MessagePayload
    round: int
    turn: int


class DebateProgressEvent(BaseModel):
    """Combined round/turn/status update, optionally carrying the new message."""

    type: Literal["debate_progress"] = "debate_progress"
    session_id: str
    status: str
    current_round: int
    current_turn: int
    message: MessagePayload | None = None


class DebateCompletedEvent(BaseModel):
    type: Literal["debate_completed"] = "debate_completed"
    session_id: str
    winner: str
    total_scores: dict[str, int]
    summary: str

    @classmethod
    def from_result(cls, result: DebateResult) -> "DebateCompletedEvent":
        return cls(
            session_id=result.session_id,
            winner=result.winner.value,
            total_scores=dict(result.total_scores),
            summary=result.summary,
        )


class DebateErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    session_id: str
    error: str


DebateEvent = Annotated[
    StatusChangedEvent
    | TurnGeneratedEvent
    | DebateProgressEvent
    | DebateCompletedEvent
    | DebateErrorEvent,
    Field(discriminator="type"),
]


def serialize_event(event: BaseModel) -> str:
    """Serialize an event for the wire."""
    return event.model_dump_json()
