"""Data models for the debate engine."""

from dataclasses import dataclass, field
from datetime import datetime
import uuid

from .types import SessionStatus, Stance, Winner

MAX_SCORE = 10


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Participant:
    """An AI debater bound to a stance and a credential configuration."""

    id: str
    name: str
    api_config_id: str
    stance: Stance
    personality: str = ""
    instructions: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class Judge:
    """An AI judge scoring participants against a set of criteria."""

    id: str
    name: str
    api_config_id: str
    criteria: tuple[str, ...] = ()
    instructions: str = ""
    is_active: bool = True


@dataclass
class DebateSession:
    """Persistent state of a debate."""

    id: str
    topic: str
    max_rounds: int
    max_words_per_turn: int
    description: str | None = None
    participant_ids: list[str] = field(default_factory=list)
    judge_ids: list[str] = field(default_factory=list)
    status: SessionStatus = SessionStatus.CREATED
    current_round: int = 0
    current_turn: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None


@dataclass(frozen=True)
class DebateMessage:
    """A single turn in the debate. Never mutated after creation."""

    session_id: str
    participant_id: str
    round: int
    turn: int
    content: str
    word_count: int
    id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=datetime.now)
    # Filled in by the store when loading
    participant_name: str | None = None
    stance: Stance | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "session_id": self.session_id,
            "participant_id": self.participant_id,
            "participant_name": self.participant_name,
            "stance": self.stance.value if self.stance else None,
            "round": self.round,
            "turn": self.turn,
            "content": self.content,
            "word_count": self.word_count,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class JudgeScore:
    """A judge's score for one participant."""

    session_id: str
    judge_id: str
    participant_id: str
    criteria: str
    score: int
    comments: str
    max_score: int = MAX_SCORE
    id: str = field(default_factory=_new_id)
    timestamp: datetime = field(default_factory=datetime.now)
    judge_name: str | None = None
    participant_name: str | None = None
    stance: Stance | None = None


@dataclass
class DebateResult:
    """Aggregated verdict, recomputed from the stored judge scores."""

    session_id: str
    winner: Winner
    total_scores: dict[str, int]
    judge_scores: list[JudgeScore]
    summary: str
    completed_at: datetime = field(default_factory=datetime.now)


@dataclass
class DebateStatusSnapshot:
    """Point-in-time view of an engine."""

    session_id: str
    status: SessionStatus
    current_round: int
    current_turn: int
    max_rounds: int
    is_running: bool
