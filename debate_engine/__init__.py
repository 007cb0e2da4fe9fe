"""Debate orchestration and flow management."""

from .types import SessionStatus, Stance, Winner
from .models import (
    DebateMessage,
    DebateResult,
    DebateSession,
    DebateStatusSnapshot,
    Judge,
    JudgeScore,
    Participant,
)
from .prompt_builder import PromptBuilder
from .utils import count_words, enforce_word_limit

__all__ = [
    "SessionStatus",
    "Stance",
    "Winner",
    "DebateMessage",
    "DebateResult",
    "DebateSession",
    "DebateStatusSnapshot",
    "Judge",
    "JudgeScore",
    "Participant",
    "PromptBuilder",
    "count_words",
    "enforce_word_limit",
]
