"""Judging system implementations."""

from .base import BaseJudge, ParsedEvaluation, clamp_score
from .ai_judge import AIJudge, parse_evaluation
from .factory import create_judges
from .scoring import calculate_debate_result, determine_winner, total_scores_by_stance

__all__ = [
    "BaseJudge",
    "ParsedEvaluation",
    "clamp_score",
    "AIJudge",
    "parse_evaluation",
    "create_judges",
    "calculate_debate_result",
    "determine_winner",
    "total_scores_by_stance",
]
