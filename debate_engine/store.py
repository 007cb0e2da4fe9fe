"""Persistence boundary used by the engine."""

import asyncio
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Protocol

from config.settings import ApiConfig

from .database import DatabaseManager
from .models import DebateMessage, DebateSession, Judge, JudgeScore, Participant
from .types import SessionStatus

logger = logging.getLogger(__name__)


class DebateStore(Protocol):
    """Durable storage consumed by the engine.

    Writes are awaited but carry no transaction context; each call commits on
    its own.
    """

    async def load_session(self, session_id: str) -> DebateSession | None: ...

    async def save_session_status(
        self, session_id: str, status: SessionStatus, completed_at: datetime | None = None
    ) -> None: ...

    async def save_counters(
        self,
        session_id: str,
        current_round: int | None = None,
        current_turn: int | None = None,
    ) -> None: ...

    async def append_message(self, message: DebateMessage) -> None: ...

    async def load_messages(
        self,
        session_id: str,
        before_round: int | None = None,
        participant_id: str | None = None,
    ) -> list[DebateMessage]: ...

    async def append_score(self, score: JudgeScore) -> None: ...

    async def load_scores(self, session_id: str) -> list[JudgeScore]: ...

    async def load_participants(self, session_id: str) -> list[Participant]: ...

    async def load_judges(self, session_id: str) -> list[Judge]: ...

    async def load_credential(self, config_id: str) -> ApiConfig | None: ...


class SQLiteDebateStore:
    """DebateStore backed by SQLite, with credentials taken from the app config.

    sqlite3 calls run in a worker thread so they never block the event loop.
    """

    def __init__(self, db_manager: DatabaseManager, api_configs: Mapping[str, ApiConfig]):
        self.db_manager = db_manager
        self._api_configs = dict(api_configs)

    async def save_participant(self, participant: Participant) -> None:
        await asyncio.to_thread(self.db_manager.save_participant, participant)

    async def save_judge(self, judge: Judge) -> None:
        await asyncio.to_thread(self.db_manager.save_judge, judge)

    async def list_participants(self) -> list[Participant]:
        return await asyncio.to_thread(self.db_manager.list_participants)

    async def list_judges(self) -> list[Judge]:
        return await asyncio.to_thread(self.db_manager.list_judges)

    async def create_session(self, session: DebateSession) -> None:
        await asyncio.to_thread(self.db_manager.save_session, session)

    async def list_sessions(self) -> list[DebateSession]:
        return await asyncio.to_thread(self.db_manager.list_sessions)

    async def load_session(self, session_id: str) -> DebateSession | None:
        return await asyncio.to_thread(self.db_manager.load_session, session_id)

    async def save_session_status(
        self, session_id: str, status: SessionStatus, completed_at: datetime | None = None
    ) -> None:
        await asyncio.to_thread(
            self.db_manager.update_session_status, session_id, status, completed_at
        )

    async def save_counters(
        self,
        session_id: str,
        current_round: int | None = None,
        current_turn: int | None = None,
    ) -> None:
        await asyncio.to_thread(
            self.db_manager.update_counters, session_id, current_round, current_turn
        )

    async def append_message(self, message: DebateMessage) -> None:
        await asyncio.to_thread(self.db_manager.save_message, message)

    async def load_messages(
        self,
        session_id: str,
        before_round: int | None = None,
        participant_id: str | None = None,
    ) -> list[DebateMessage]:
        return await asyncio.to_thread(
            self.db_manager.load_messages, session_id, before_round, participant_id
        )

    async def append_score(self, score: JudgeScore) -> None:
        await asyncio.to_thread(self.db_manager.save_score, score)

    async def load_scores(self, session_id: str) -> list[JudgeScore]:
        return await asyncio.to_thread(self.db_manager.load_scores, session_id)

    async def load_participants(self, session_id: str) -> list[Participant]:
        return await asyncio.to_thread(self.db_manager.load_session_participants, session_id)

    async def load_judges(self, session_id: str) -> list[Judge]:
        return await asyncio.to_thread(self.db_manager.load_session_judges, session_id)

    async def load_credential(self, config_id: str) -> ApiConfig | None:
        config = self._api_configs.get(config_id)
        if config is None:
            logger.warning(f"No API config found with id {config_id}")
        return config

    def list_credentials(self) -> list[ApiConfig]:
        return list(self._api_configs.values())
