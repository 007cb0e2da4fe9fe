from datetime import datetime

from pydantic import BaseModel

from debate_engine.models import DebateResult, DebateSession, DebateStatusSnapshot


class DebateResponse(BaseModel):
    """Response model for debate session information."""

    id: str
    topic: str
    description: str | None = None
    status: str
    max_rounds: int
    max_words_per_turn: int
    current_round: int
    current_turn: int
    participant_ids: list[str]
    judge_ids: list[str]
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None

    @classmethod
    def from_session(cls, session: DebateSession) -> "DebateResponse":
        return cls(
            id=session.id,
            topic=session.topic,
            description=session.description,
            status=session.status.value,
            max_rounds=session.max_rounds,
            max_words_per_turn=session.max_words_per_turn,
            current_round=session.current_round,
            current_turn=session.current_turn,
            participant_ids=session.participant_ids,
            judge_ids=session.judge_ids,
            created_at=session.created_at,
            updated_at=session.updated_at,
            completed_at=session.completed_at,
        )


class DebateStatusResponse(BaseModel):
    session_id: str
    status: str
    current_round: int
    current_turn: int
    max_rounds: int
    is_running: bool

    @classmethod
    def from_snapshot(cls, snapshot: DebateStatusSnapshot) -> "DebateStatusResponse":
        return cls(
            session_id=snapshot.session_id,
            status=snapshot.status.value,
            current_round=snapshot.current_round,
            current_turn=snapshot.current_turn,
            max_rounds=snapshot.max_rounds,
            is_running=snapshot.is_running,
        )


class DebateResultResponse(BaseModel):
    """Verdict recomputed from the stored judge scores."""

    session_id: str
    winner: str
    total_scores: dict[str, int]
    summary: str
    score_count: int

    @classmethod
    def from_result(cls, result: DebateResult) -> "DebateResultResponse":
        return cls(
            session_id=result.session_id,
            winner=result.winner.value,
            total_scores=result.total_scores,
            summary=result.summary,
            score_count=len(result.judge_scores),
        )
