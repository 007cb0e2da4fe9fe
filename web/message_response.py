from datetime import datetime

from pydantic import BaseModel

from debate_engine.models import DebateMessage, JudgeScore


class MessageResponse(BaseModel):
    """Response model for debate messages."""

    id: str
    participant_id: str
    participant_name: str | None = None
    stance: str | None = None
    round: int
    turn: int
    content: str
    word_count: int
    timestamp: datetime

    @classmethod
    def from_message(cls, message: DebateMessage) -> "MessageResponse":
        return cls(
            id=message.id,
            participant_id=message.participant_id,
            participant_name=message.participant_name,
            stance=message.stance.value if message.stance else None,
            round=message.round,
            turn=message.turn,
            content=message.content,
            word_count=message.word_count,
            timestamp=message.timestamp,
        )


class ScoreResponse(BaseModel):
    """Response model for judge scores."""

    id: str
    judge_id: str
    judge_name: str | None = None
    participant_id: str
    participant_name: str | None = None
    stance: str | None = None
    criteria: str
    score: int
    max_score: int
    comments: str
    timestamp: datetime

    @classmethod
    def from_score(cls, score: JudgeScore) -> "ScoreResponse":
        return cls(
            id=score.id,
            judge_id=score.judge_id,
            judge_name=score.judge_name,
            participant_id=score.participant_id,
            participant_name=score.participant_name,
            stance=score.stance.value if score.stance else None,
            criteria=score.criteria,
            score=score.score,
            max_score=score.max_score,
            comments=score.comments,
            timestamp=score.timestamp,
        )
