"""Judging phase run after a debate completes."""

import logging
from collections.abc import Awaitable, Callable

from judges.factory import create_judges
from judges.scoring import calculate_debate_result
from models.manager import ModelManager

from .events import DebateCompletedEvent
from .models import DebateResult, DebateSession, Judge, Participant
from .store import DebateStore

logger = logging.getLogger(__name__)


class JudgeCoordinator:
    """Scores every active participant with every active judge."""

    def __init__(
        self,
        session: DebateSession,
        participants: list[Participant],
        judges: list[Judge],
        store: DebateStore,
        model_manager: ModelManager,
        publish: Callable[[DebateCompletedEvent], Awaitable[None]],
    ):
        self.session = session
        self.participants = [p for p in participants if p.is_active]
        self.judges = judges
        self.store = store
        self.model_manager = model_manager
        self.publish = publish

    async def run_judging_phase(self) -> DebateResult:
        """Score the full judge x participant cross product, then publish the verdict.

        Each score is persisted as soon as it is produced. A failing pairing is
        logged and skipped without aborting the remaining ones.
        """
        ai_judges = create_judges(self.judges, self.model_manager)
        logger.info(
            f"Judging session {self.session.id}: {len(ai_judges)} judges x "
            f"{len(self.participants)} participants"
        )

        for judge in ai_judges:
            for participant in self.participants:
                try:
                    messages = await self.store.load_messages(
                        self.session.id, participant_id=participant.id
                    )
                    score = await judge.evaluate_participant(self.session, participant, messages)
                    await self.store.append_score(score)
                except Exception as e:
                    logger.error(
                        f"Judge {judge.name} failed to score {participant.name}: {e}"
                    )

        scores = await self.store.load_scores(self.session.id)
        result = calculate_debate_result(
            self.session.id, scores, {p.id: p for p in self.participants}
        )
        logger.info(result.summary)

        await self.publish(DebateCompletedEvent.from_result(result))
        return result
