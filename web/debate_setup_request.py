from pydantic import BaseModel, field_validator


class DebateSetupRequest(BaseModel):
    """Request model for creating a new debate session."""

    topic: str
    description: str | None = None
    participant_ids: list[str]
    judge_ids: list[str] = []
    max_rounds: int | None = None
    max_words_per_turn: int | None = None

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Topic must not be empty")
        return v.strip()

    @field_validator("participant_ids")
    @classmethod
    def validate_participant_ids(cls, v: list[str]) -> list[str]:
        """Participants speak in the given order and may not repeat."""
        if not v:
            raise ValueError("At least one participant is required")
        if len(set(v)) != len(v):
            raise ValueError("Participant ids must be unique")
        return v

    @field_validator("judge_ids")
    @classmethod
    def validate_judge_ids(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("Judge ids must be unique")
        return v

    @field_validator("max_rounds", "max_words_per_turn")
    @classmethod
    def validate_positive(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("Must be at least 1")
        return v
