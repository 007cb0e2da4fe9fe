"""Turn scheduling: walks rounds and participants in order."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from models.manager import ModelManager
from models.providers.exceptions import ConfigurationError, ProviderError

from .context_builder import ContextBuilder
from .events import DebateProgressEvent, MessagePayload, TurnGeneratedEvent
from .models import DebateMessage, DebateSession, Participant
from .prompt_builder import PromptBuilder
from .store import DebateStore
from .utils import count_words, enforce_word_limit

logger = logging.getLogger(__name__)

type Publisher = Callable[[DebateProgressEvent | TurnGeneratedEvent], Awaitable[None]]


class RoundManager:
    """Generates every turn of a debate, one participant at a time.

    The loop only ever exits early when ``should_continue`` turns false; it is
    checked before each round and before each turn, never in the middle of a
    provider call.
    """

    def __init__(
        self,
        session: DebateSession,
        participants: list[Participant],
        store: DebateStore,
        model_manager: ModelManager,
        publish: Publisher,
        should_continue: Callable[[], bool],
        turn_delay_seconds: float = 2.0,
    ):
        self.session = session
        self.participants = [p for p in participants if p.is_active]
        self.store = store
        self.model_manager = model_manager
        self.publish = publish
        self.should_continue = should_continue
        self.turn_delay_seconds = turn_delay_seconds
        self.context_builder = ContextBuilder(store, session.topic)
        self.prompt_builder = PromptBuilder(session)

    def resume_point(self) -> tuple[int, int]:
        """Return the (round, turn) the next run starts from."""
        if self.session.current_round < 1:
            return 1, 1
        return self.session.current_round, max(self.session.current_turn, 1)

    async def run(self) -> bool:
        """Run the remaining rounds.

        Returns:
            True if every round was played while still active, False if the
            run was interrupted by a pause or stop.
        """
        start_round, start_turn = self.resume_point()
        existing = await self.store.load_messages(self.session.id)
        taken = {(msg.round, msg.turn) for msg in existing}

        logger.info(
            f"Running session {self.session.id} from round {start_round} turn {start_turn} "
            f"with {len(self.participants)} participants"
        )

        for round_number in range(start_round, self.session.max_rounds + 1):
            if not self.should_continue():
                return False

            # Round and turn move together so a pause here resumes at turn 1.
            self.session.current_round = round_number
            self.session.current_turn = 0
            await self.store.save_counters(
                self.session.id, current_round=round_number, current_turn=0
            )

            for index, participant in enumerate(self.participants):
                if not self.should_continue():
                    return False

                turn = index + 1
                if round_number == start_round and turn < start_turn:
                    continue
                if (round_number, turn) in taken:
                    logger.debug(f"Round {round_number} turn {turn} already recorded, skipping")
                    continue

                self.session.current_turn = turn
                await self.store.save_counters(self.session.id, current_turn=turn)
                await self.publish(self._progress_event())

                message = await self._run_turn(participant, round_number, turn)
                if message is None:
                    continue

                taken.add((round_number, turn))
                await self.publish(
                    TurnGeneratedEvent(
                        session_id=self.session.id,
                        message=MessagePayload.from_message(message),
                        round=round_number,
                        turn=turn,
                    )
                )
                await self.publish(self._progress_event(message))

                await asyncio.sleep(self.turn_delay_seconds)

        return self.should_continue()

    async def _run_turn(
        self, participant: Participant, round_number: int, turn: int
    ) -> DebateMessage | None:
        """Generate and persist one turn; a provider failure skips the slot."""
        try:
            return await self.generate_turn(participant, round_number, turn)
        except (ProviderError, ConfigurationError) as e:
            logger.error(
                f"Error generating response for {participant.name} "
                f"(round {round_number}, turn {turn}): {e}"
            )
            return None

    async def generate_turn(
        self, participant: Participant, round_number: int, turn: int
    ) -> DebateMessage:
        context = await self.context_builder.build_context(self.session.id, round_number)
        prompt = self.prompt_builder.participant_prompt(participant, round_number, context)
        logger.debug(f"Prompt for {participant.name}: {len(prompt)} chars")

        result = await self.model_manager.generate_response(participant.api_config_id, prompt)
        content = enforce_word_limit(result.content, self.session.max_words_per_turn)

        message = DebateMessage(
            session_id=self.session.id,
            participant_id=participant.id,
            round=round_number,
            turn=turn,
            content=content,
            word_count=count_words(content),
            participant_name=participant.name,
            stance=participant.stance,
        )
        await self.store.append_message(message)

        logger.info(
            f"Round {round_number} turn {turn}: {participant.name} "
            f"({message.word_count} words)"
        )
        return message

    def _progress_event(self, message: DebateMessage | None = None) -> DebateProgressEvent:
        return DebateProgressEvent(
            session_id=self.session.id,
            status=self.session.status.value,
            current_round=self.session.current_round,
            current_turn=self.session.current_turn,
            message=MessagePayload.from_message(message) if message else None,
        )
