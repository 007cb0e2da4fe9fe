"""Pytest configuration and shared fixtures.

Fixtures here build a real SQLite store in a temporary directory and a model
manager whose providers are scripted fakes, so engine tests never touch the
network.
"""

import asyncio
from collections.abc import Callable

import pytest

from config.settings import ApiConfig, SystemConfig
from debate_engine.database import DatabaseManager
from debate_engine.models import DebateSession, Judge, Participant
from debate_engine.store import SQLiteDebateStore
from debate_engine.types import Stance
from models.manager import ModelManager
from models.providers.base_model_provider import BaseModelProvider, GenerationResult


class ScriptedProvider(BaseModelProvider):
    """Provider returning queued responses.

    A queued exception is raised instead of returned. When ``gate`` is set the
    call with index ``gate_call`` (1-based) waits for it before answering.
    """

    def __init__(self, api_config: ApiConfig, default: str = "A reasoned argument."):
        super().__init__(api_config, SystemConfig())
        self.responses: list[str | Exception] = []
        self.default = default
        self.prompts: list[str] = []
        self.gate: asyncio.Event | None = None
        self.gate_call = 0

    @property
    def provider_name(self) -> str:
        return "scripted"

    async def generate_response(self, prompt: str, context: str | None = None) -> GenerationResult:
        self.prompts.append(prompt)
        if self.gate is not None and len(self.prompts) == self.gate_call:
            await self.gate.wait()

        item = self.responses.pop(0) if self.responses else self.default
        if isinstance(item, Exception):
            raise item
        return GenerationResult(content=item, model=self.api_config.model, provider="scripted")


# =============================================================================
# SHARED FIXTURES - Available to all test modules
# =============================================================================


@pytest.fixture
def sample_debate_topic() -> str:
    """Provide a standard debate topic for testing."""
    return "Should artificial intelligence be regulated by governments?"


@pytest.fixture
def api_configs() -> dict[str, ApiConfig]:
    """One credential configuration per role so each can be scripted separately."""
    return {
        config_id: ApiConfig(
            id=config_id,
            name=config_id,
            provider="custom",
            model=f"{config_id}-model",
            base_url="http://fake.test/generate",
        )
        for config_id in ("pro-config", "con-config", "judge-config")
    }


@pytest.fixture
def db_manager(tmp_path) -> DatabaseManager:
    return DatabaseManager(str(tmp_path / "debates.db"))


@pytest.fixture
def store(db_manager: DatabaseManager, api_configs: dict[str, ApiConfig]) -> SQLiteDebateStore:
    return SQLiteDebateStore(db_manager, api_configs)


@pytest.fixture
def model_manager() -> ModelManager:
    return ModelManager(SystemConfig())


@pytest.fixture
def providers(
    model_manager: ModelManager, api_configs: dict[str, ApiConfig]
) -> dict[str, ScriptedProvider]:
    """Scripted providers registered with the model manager, keyed by config id."""
    registered = {}
    for config_id, config in api_configs.items():
        provider = ScriptedProvider(config)
        model_manager.register_provider(config, provider)
        registered[config_id] = provider
    return registered


@pytest.fixture
def debaters(db_manager: DatabaseManager) -> list[Participant]:
    participants = [
        Participant(
            id="pro-1",
            name="Advocate",
            api_config_id="pro-config",
            stance=Stance.PRO,
            personality="optimistic",
            instructions="Cite examples.",
        ),
        Participant(
            id="con-1",
            name="Skeptic",
            api_config_id="con-config",
            stance=Stance.CON,
            personality="cautious",
            instructions="Question assumptions.",
        ),
    ]
    for participant in participants:
        db_manager.save_participant(participant)
    return participants


@pytest.fixture
def judge(db_manager: DatabaseManager) -> Judge:
    judge = Judge(
        id="judge-1",
        name="Chief Judge",
        api_config_id="judge-config",
        criteria=("logic", "evidence"),
        instructions="Be fair.",
    )
    db_manager.save_judge(judge)
    return judge


@pytest.fixture
def make_session(
    db_manager: DatabaseManager,
    debaters: list[Participant],
    judge: Judge,
    sample_debate_topic: str,
) -> Callable[..., DebateSession]:
    """Factory persisting a session with both debaters and, optionally, the judge."""

    def _make(max_rounds: int = 2, max_words_per_turn: int = 50, with_judge: bool = True):
        session = DebateSession(
            id=f"session-{max_rounds}-{max_words_per_turn}-{int(with_judge)}",
            topic=sample_debate_topic,
            max_rounds=max_rounds,
            max_words_per_turn=max_words_per_turn,
            participant_ids=[p.id for p in debaters],
            judge_ids=[judge.id] if with_judge else [],
        )
        db_manager.save_session(session)
        return session

    return _make


# =============================================================================
# PYTEST CONFIGURATION HOOKS
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
