from pydantic import BaseModel, field_validator

from config.settings import ApiConfig
from debate_engine.models import Judge, Participant
from debate_engine.types import Stance


class ParticipantRequest(BaseModel):
    """Request model for registering an AI debater."""

    name: str
    api_config_id: str
    stance: Stance
    personality: str = ""
    instructions: str = ""
    is_active: bool = True

    @field_validator("name", "api_config_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Must not be empty")
        return v.strip()


class ParticipantResponse(BaseModel):
    id: str
    name: str
    api_config_id: str
    stance: str
    personality: str
    instructions: str
    is_active: bool

    @classmethod
    def from_participant(cls, participant: Participant) -> "ParticipantResponse":
        return cls(
            id=participant.id,
            name=participant.name,
            api_config_id=participant.api_config_id,
            stance=participant.stance.value,
            personality=participant.personality,
            instructions=participant.instructions,
            is_active=participant.is_active,
        )


class JudgeRequest(BaseModel):
    """Request model for registering an AI judge.

    Criteria default to the configured ``default_judge_criteria`` when empty.
    """

    name: str
    api_config_id: str
    criteria: list[str] = []
    instructions: str = ""
    is_active: bool = True

    @field_validator("name", "api_config_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Must not be empty")
        return v.strip()


class JudgeResponse(BaseModel):
    id: str
    name: str
    api_config_id: str
    criteria: list[str]
    instructions: str
    is_active: bool

    @classmethod
    def from_judge(cls, judge: Judge) -> "JudgeResponse":
        return cls(
            id=judge.id,
            name=judge.name,
            api_config_id=judge.api_config_id,
            criteria=list(judge.criteria),
            instructions=judge.instructions,
            is_active=judge.is_active,
        )


class ApiConfigResponse(BaseModel):
    """Credential configuration with the secret redacted."""

    id: str
    name: str
    provider: str
    model: str
    base_url: str | None = None
    has_api_key: bool
    is_active: bool

    @classmethod
    def from_config(cls, config: ApiConfig) -> "ApiConfigResponse":
        return cls(
            id=config.id,
            name=config.name,
            provider=config.provider,
            model=config.model,
            base_url=config.base_url,
            has_api_key=config.resolve_api_key() is not None,
            is_active=config.is_active,
        )
