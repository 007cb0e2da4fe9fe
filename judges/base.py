"""Base classes and interfaces for judging systems."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from debate_engine.models import MAX_SCORE, DebateMessage, DebateSession, Judge, JudgeScore, Participant

MIN_SCORE = 1
DEFAULT_SCORE = 5


@dataclass
class ParsedEvaluation:
    """Score and comments extracted from a judge response."""

    score: int
    comments: str


def clamp_score(score: int) -> int:
    """Clamp a parsed score into [MIN_SCORE, MAX_SCORE]."""
    return max(MIN_SCORE, min(MAX_SCORE, score))


class BaseJudge(ABC):
    """Abstract base class for all judges."""

    def __init__(self, judge: Judge):
        self.judge = judge

    @property
    def name(self) -> str:
        """Judge name/identifier."""
        return self.judge.name

    @property
    def criteria_label(self) -> str:
        return ", ".join(self.judge.criteria)

    @abstractmethod
    async def evaluate_participant(
        self,
        session: DebateSession,
        participant: Participant,
        messages: list[DebateMessage],
    ) -> JudgeScore:
        """Score one participant from their ordered messages."""
        pass
