"""AI-powered debate judge using language models."""

import logging
import re
import time

from debate_engine.models import DebateMessage, DebateSession, Judge, JudgeScore, Participant
from debate_engine.prompt_builder import PromptBuilder
from models.manager import ModelManager
from .base import DEFAULT_SCORE, MAX_SCORE, BaseJudge, ParsedEvaluation, clamp_score

logger = logging.getLogger(__name__)

SCORE_PATTERN = re.compile(r"SCORE:\s*(\d+)", re.IGNORECASE)
COMMENTS_PATTERN = re.compile(r"COMMENTS:\s*(.*)", re.IGNORECASE | re.DOTALL)


def parse_evaluation(response: str) -> ParsedEvaluation:
    """Extract ``SCORE:`` and ``COMMENTS:`` from a judge response.

    Malformed output never raises: a missing score defaults to 5, missing
    comments fall back to the raw response, and any score is clamped into
    [1, 10].
    """
    score_match = SCORE_PATTERN.search(response)
    comments_match = COMMENTS_PATTERN.search(response)

    if score_match:
        score = int(score_match.group(1))
    else:
        logger.warning("Judge response has no SCORE token, using default score")
        score = DEFAULT_SCORE

    comments = comments_match.group(1).strip() if comments_match else response
    return ParsedEvaluation(score=clamp_score(score), comments=comments)


class AIJudge(BaseJudge):
    """AI judge using a dedicated language model for evaluation."""

    def __init__(self, judge: Judge, model_manager: ModelManager):
        super().__init__(judge)
        self.model_manager = model_manager

    async def evaluate_participant(
        self,
        session: DebateSession,
        participant: Participant,
        messages: list[DebateMessage],
    ) -> JudgeScore:
        """Evaluate one participant using the judge's model."""
        logger.info(f"{self.name} evaluating {participant.name} ({participant.stance.value})")

        prompt = PromptBuilder(session).judge_prompt(self.judge, participant, messages)

        start_time = time.time()
        async with self.model_manager.model_session(self.judge.api_config_id):
            result = await self.model_manager.generate_response(
                self.judge.api_config_id, prompt
            )
        generation_time = time.time() - start_time

        evaluation = parse_evaluation(result.content)
        logger.info(
            f"{self.name} scored {participant.name} {evaluation.score}/{MAX_SCORE} "
            f"in {generation_time:.2f}s"
        )

        return JudgeScore(
            session_id=session.id,
            judge_id=self.judge.id,
            participant_id=participant.id,
            criteria=self.criteria_label,
            score=evaluation.score,
            max_score=MAX_SCORE,
            comments=evaluation.comments,
            judge_name=self.judge.name,
            participant_name=participant.name,
            stance=participant.stance,
        )
