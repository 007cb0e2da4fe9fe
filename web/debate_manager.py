"""Registry of debate engines, one per running session."""

import asyncio
import logging
import uuid

from config.settings import AppConfig
from debate_engine.engine import DebateEngine
from debate_engine.events import DebateEvent
from debate_engine.exceptions import SessionNotFoundError
from debate_engine.models import DebateResult, DebateSession, DebateStatusSnapshot
from debate_engine.store import SQLiteDebateStore
from judges.scoring import calculate_debate_result
from models.manager import ModelManager
from web.broadcaster import DebateBroadcaster

logger = logging.getLogger(__name__)


class DebateManager:
    """Maps session ids to their engine and wires engine events to observers.

    At most one engine exists per session id. The registry lock is never held
    while an engine operation runs.
    """

    def __init__(
        self,
        config: AppConfig,
        store: SQLiteDebateStore,
        model_manager: ModelManager,
        broadcaster: DebateBroadcaster,
    ):
        self.config = config
        self.store = store
        self.model_manager = model_manager
        self.broadcaster = broadcaster
        self.engines: dict[str, DebateEngine] = {}
        self._lock = asyncio.Lock()

    async def create_session(
        self,
        topic: str,
        participant_ids: list[str],
        judge_ids: list[str] | None = None,
        max_rounds: int | None = None,
        max_words_per_turn: int | None = None,
        description: str | None = None,
    ) -> DebateSession:
        """Persist a new session in the created state."""
        defaults = self.config.debate
        session = DebateSession(
            id=str(uuid.uuid4()),
            topic=topic,
            description=description,
            max_rounds=max_rounds or defaults.max_rounds,
            max_words_per_turn=max_words_per_turn or defaults.max_words_per_turn,
            participant_ids=list(participant_ids),
            judge_ids=list(judge_ids or []),
        )
        await self.store.create_session(session)
        logger.info(f"Created debate {session.id}: {topic}")
        return session

    async def get_session(self, session_id: str) -> DebateSession:
        engine = self.engines.get(session_id)
        if engine is not None and engine.session is not None:
            return engine.session

        session = await self.store.load_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def start_debate(self, session_id: str) -> DebateStatusSnapshot:
        engine = await self._get_engine(session_id)
        await engine.start()
        return engine.get_status()

    async def pause_debate(self, session_id: str) -> DebateStatusSnapshot:
        engine = await self._get_engine(session_id)
        await engine.pause()
        return engine.get_status()

    async def stop_debate(self, session_id: str) -> DebateResult:
        engine = await self._get_engine(session_id)
        return await engine.stop()

    async def get_status(self, session_id: str) -> DebateStatusSnapshot:
        engine = self.engines.get(session_id)
        if engine is not None:
            return engine.get_status()

        session = await self.get_session(session_id)
        return DebateStatusSnapshot(
            session_id=session.id,
            status=session.status,
            current_round=session.current_round,
            current_turn=session.current_turn,
            max_rounds=session.max_rounds,
            is_running=False,
        )

    async def get_result(self, session_id: str) -> DebateResult:
        """Recompute the verdict from the stored scores."""
        await self.get_session(session_id)
        scores = await self.store.load_scores(session_id)
        participants = await self.store.load_participants(session_id)
        return calculate_debate_result(session_id, scores, {p.id: p for p in participants})

    async def shutdown(self) -> None:
        """Stop every engine loop; persisted statuses are left as they are."""
        async with self._lock:
            engines = list(self.engines.values())
            self.engines.clear()

        for engine in engines:
            await engine.shutdown()
        logger.info(f"Shut down {len(engines)} debate engine(s)")

    async def _get_engine(self, session_id: str) -> DebateEngine:
        """Return the registered engine for a session, creating it on first use."""
        async with self._lock:
            engine = self.engines.get(session_id)
            if engine is None:
                engine = DebateEngine(
                    session_id,
                    self.store,
                    self.model_manager,
                    turn_delay_seconds=self.config.debate.turn_delay_seconds,
                    event_callback=self._publish_event,
                    on_terminal=self._release_engine,
                )
                await engine.initialize()
                # Terminal sessions are never registered
                if not engine.status.is_terminal:
                    self.engines[session_id] = engine
        return engine

    async def _publish_event(self, session_id: str, event: DebateEvent) -> None:
        await self.broadcaster.publish(session_id, event)

    async def _release_engine(self, session_id: str) -> None:
        async with self._lock:
            self.engines.pop(session_id, None)
        logger.debug(f"Released engine for session {session_id}")
