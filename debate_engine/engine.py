"""Debate engine controller: one instance drives one session."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from models.manager import ModelManager
from models.providers.exceptions import ConfigurationError

from .events import DebateErrorEvent, StatusChangedEvent
from .exceptions import EngineStateError, InternalError, SessionNotFoundError
from .judge_coordinator import JudgeCoordinator
from .models import DebateResult, DebateSession, DebateStatusSnapshot, Judge, Participant
from .round_manager import RoundManager
from .store import DebateStore
from .types import EventCallback, SessionStatus, can_transition

logger = logging.getLogger(__name__)


class DebateEngine:
    """Owns the state machine of a single debate session.

    Status changes are serialized by an internal lock. The turn loop runs in
    its own task and is stopped cooperatively through the active flag.
    """

    def __init__(
        self,
        session_id: str,
        store: DebateStore,
        model_manager: ModelManager,
        turn_delay_seconds: float = 2.0,
        event_callback: EventCallback | None = None,
        on_terminal: Callable[[str], Awaitable[None]] | None = None,
    ):
        self.session_id = session_id
        self.store = store
        self.model_manager = model_manager
        self.turn_delay_seconds = turn_delay_seconds
        self.event_callback = event_callback
        self.on_terminal = on_terminal

        self.session: DebateSession | None = None
        self.participants: list[Participant] = []
        self.judges: list[Judge] = []
        self.result: DebateResult | None = None

        self._lock = asyncio.Lock()
        self._active = False
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def status(self) -> SessionStatus:
        if self.session is None:
            raise InternalError(f"Engine for session {self.session_id} is not initialized")
        return self.session.status

    async def initialize(self) -> None:
        """Load the session, its participants and judges, and their credentials.

        A missing or unusable credential is logged and tolerated here; the turn
        or scoring pairing that needs it fails when it is reached.
        """
        session = await self.store.load_session(self.session_id)
        if session is None:
            raise SessionNotFoundError(self.session_id)

        self.session = session
        self.participants = await self.store.load_participants(self.session_id)
        self.judges = [j for j in await self.store.load_judges(self.session_id) if j.is_active]

        config_ids = {p.api_config_id for p in self.participants}
        config_ids.update(j.api_config_id for j in self.judges)

        for config_id in sorted(config_ids):
            if self.model_manager.is_registered(config_id):
                continue
            credential = await self.store.load_credential(config_id)
            if credential is None:
                logger.warning(f"Session {self.session_id}: missing API config {config_id}")
                continue
            try:
                self.model_manager.register_config(credential)
            except ConfigurationError as e:
                logger.warning(f"Session {self.session_id}: unusable API config {config_id}: {e}")

        # A session stored as running with no live task was interrupted by a
        # restart; it resumes from its persisted counters like a paused one.
        if session.status is SessionStatus.RUNNING and (self._task is None or self._task.done()):
            logger.warning(f"Session {self.session_id} was left running, marking it paused")
            await self._set_status(SessionStatus.PAUSED)

        logger.info(
            f"Initialized session {self.session_id} ({session.status.value}): "
            f"{len(self.participants)} participants, {len(self.judges)} judges"
        )

    async def start(self) -> None:
        """Start a created session or resume a paused one.

        The turn loop runs in a background task; this returns once the
        session is marked running.
        """
        if self.session is None:
            await self.initialize()

        self._require("start", SessionStatus.RUNNING)

        # A paused run may still be finishing its in-flight turn.
        if self._task is not None and not self._task.done():
            await self._task

        async with self._lock:
            self._require("start", SessionStatus.RUNNING)

            self._generation += 1
            self._active = True
            await self._set_status(SessionStatus.RUNNING)

            generation = self._generation
            self._task = asyncio.create_task(self._run(generation))

        logger.info(f"Started session {self.session_id} (run {generation})")

    async def pause(self) -> None:
        async with self._lock:
            if self.status is not SessionStatus.RUNNING:
                raise EngineStateError("pause", self.status)

            self._active = False
            await self._set_status(SessionStatus.PAUSED)

        logger.info(f"Paused session {self.session_id}")

    async def stop(self) -> DebateResult:
        """Complete the session and run the judging phase before returning."""
        async with self._lock:
            self._require("stop", SessionStatus.COMPLETED)
            return await self._finish()

    def get_status(self) -> DebateStatusSnapshot:
        session = self.session
        if session is None:
            raise InternalError(f"Engine for session {self.session_id} is not initialized")

        return DebateStatusSnapshot(
            session_id=session.id,
            status=session.status,
            current_round=session.current_round,
            current_turn=session.current_turn,
            max_rounds=session.max_rounds,
            is_running=self._active and session.status is SessionStatus.RUNNING,
        )

    async def wait_closed(self) -> None:
        """Wait for the current run task, if any, to finish."""
        if self._task is not None:
            await self._task

    async def shutdown(self) -> None:
        """Stop the loop without changing the persisted status."""
        self._active = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info(f"Run task for session {self.session_id} cancelled")

    def _require(self, operation: str, target: SessionStatus) -> None:
        if not can_transition(self.status, target):
            raise EngineStateError(operation, self.status)

    def _should_continue(self, generation: int) -> bool:
        return self._active and generation == self._generation

    async def _run(self, generation: int) -> None:
        assert self.session is not None
        round_manager = RoundManager(
            session=self.session,
            participants=self.participants,
            store=self.store,
            model_manager=self.model_manager,
            publish=self._emit,
            should_continue=lambda: self._should_continue(generation),
            turn_delay_seconds=self.turn_delay_seconds,
        )

        try:
            completed = await round_manager.run()
        except Exception as e:
            logger.exception(f"Debate error in session {self.session_id}")
            await self._cancel(InternalError(str(e)))
            return

        if completed:
            await self._complete_naturally(generation)

    async def _complete_naturally(self, generation: int) -> None:
        async with self._lock:
            # A stop or pause may have won the race for the lock.
            if self.status is not SessionStatus.RUNNING or generation != self._generation:
                return
            await self._finish()

    async def _finish(self) -> DebateResult:
        """Mark the session completed and judge it. Caller holds the lock."""
        assert self.session is not None
        self._active = False
        self.session.status = SessionStatus.COMPLETED
        self.session.completed_at = datetime.now()
        await self.store.save_session_status(
            self.session_id, SessionStatus.COMPLETED, self.session.completed_at
        )

        coordinator = JudgeCoordinator(
            session=self.session,
            participants=self.participants,
            judges=self.judges,
            store=self.store,
            model_manager=self.model_manager,
            publish=self._emit,
        )
        self.result = await coordinator.run_judging_phase()

        await self._emit(StatusChangedEvent(session_id=self.session_id, status="completed"))
        logger.info(f"Completed session {self.session_id}: {self.result.summary}")
        await self._notify_terminal()
        return self.result

    async def _cancel(self, error: InternalError) -> None:
        async with self._lock:
            if self.status.is_terminal:
                return
            self._active = False
            await self._set_status(SessionStatus.CANCELLED)
            await self._emit(DebateErrorEvent(session_id=self.session_id, error=str(error)))

        logger.error(f"Cancelled session {self.session_id}: {error}")
        await self._notify_terminal()

    async def _set_status(self, status: SessionStatus) -> None:
        assert self.session is not None
        self.session.status = status
        self.session.updated_at = datetime.now()
        await self.store.save_session_status(self.session_id, status)
        await self._emit(StatusChangedEvent(session_id=self.session_id, status=status.value))

    async def _emit(self, event) -> None:
        if self.event_callback is None:
            return
        try:
            await self.event_callback(self.session_id, event)
        except Exception as e:
            logger.warning(f"Failed to deliver {event.type} for session {self.session_id}: {e}")

    async def _notify_terminal(self) -> None:
        if self.on_terminal is not None:
            await self.on_terminal(self.session_id)
