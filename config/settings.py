"""Configuration settings and data models."""

import json
import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "anthropic", "custom")


class ModelParameters(BaseModel):
    """Generation parameters passed to a provider."""

    temperature: float = Field(default=0.7, description="Sampling temperature")
    max_tokens: int = Field(default=1000, description="Maximum tokens per response")
    top_p: float = Field(default=1.0, description="Nucleus sampling probability")
    frequency_penalty: float = Field(default=0.0)
    presence_penalty: float = Field(default=0.0)


class ApiConfig(BaseModel):
    """Credential and model configuration used by participants and judges."""

    id: str = Field(..., description="Identifier referenced by participants and judges")
    name: str = Field(..., description="Human readable name")
    provider: str = Field(default="openai", description="Provider (openai, anthropic, custom)")
    model: str = Field(..., description="Model name, e.g. 'gpt-4o-mini'")
    api_key: str | None = Field(default=None, description="API key (prefer api_key_env)")
    api_key_env: str | None = Field(
        default=None, description="Environment variable holding the API key"
    )
    base_url: str | None = Field(default=None, description="Override the provider base URL")
    parameters: ModelParameters = Field(default_factory=ModelParameters)
    is_active: bool = Field(default=True)

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Provider must be one of: {set(SUPPORTED_PROVIDERS)}")
        return v

    def resolve_api_key(self) -> str | None:
        """Return the configured key, falling back to the named environment variable."""
        if self.api_key:
            return self.api_key
        if self.api_key_env:
            return os.getenv(self.api_key_env)
        return None


class DebateDefaults(BaseModel):
    """Defaults applied to new debate sessions."""

    max_rounds: int = Field(default=3, ge=1, description="Rounds per debate")
    max_words_per_turn: int = Field(default=200, ge=1, description="Word limit per turn")
    turn_delay_seconds: float = Field(
        default=2.0, ge=0.0, description="Pause between consecutive turns"
    )


class SystemConfig(BaseModel):
    """System-wide configuration."""

    database_path: str = Field(default="debates.db", description="SQLite database file")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    request_timeout: float = Field(
        default=60.0, description="Provider request timeout in seconds"
    )
    default_judge_criteria: list[str] = Field(
        default=["logic", "evidence", "persuasiveness"],
        description="Criteria used when a judge is created without any",
    )


class AppConfig(BaseModel):
    """Complete application configuration."""

    debate: DebateDefaults = Field(default_factory=DebateDefaults)
    system: SystemConfig = Field(default_factory=SystemConfig)
    api_configs: dict[str, ApiConfig] = Field(default_factory=dict)

    @field_validator("api_configs")
    @classmethod
    def validate_api_config_ids(cls, v: dict[str, ApiConfig]) -> dict[str, ApiConfig]:
        for key, config in v.items():
            if key != config.id:
                raise ValueError(f"api_configs key '{key}' does not match id '{config.id}'")
        return v

    @classmethod
    def load_from_file(cls, config_path: Path) -> "AppConfig":
        """Load configuration from a JSON or YAML file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        return cls(**data)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(exclude_unset=True),
                f,
                default_flow_style=False,
                indent=2,
            )


def get_default_config() -> AppConfig:
    """Load configuration from debate_config.json, creating it if needed."""
    config_path = Path(os.environ.get("DEBATE_CONFIG", "debate_config.json"))
    if not config_path.exists():
        logger.info(f"No config found at {config_path}, writing template config")
        template_config = get_template_config()
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(template_config.model_dump(), f, indent=2)
    return AppConfig.load_from_file(config_path)


def get_template_config() -> AppConfig:
    """Get template configuration for config file generation."""
    return AppConfig(
        debate=DebateDefaults(max_rounds=3, max_words_per_turn=200, turn_delay_seconds=2.0),
        system=SystemConfig(database_path="debates.db", log_level="INFO"),
        api_configs={
            "openai-default": ApiConfig(
                id="openai-default",
                name="OpenAI GPT-4o mini",
                provider="openai",
                model="gpt-4o-mini",
                api_key_env="OPENAI_API_KEY",
            ),
            "anthropic-default": ApiConfig(
                id="anthropic-default",
                name="Claude Haiku",
                provider="anthropic",
                model="claude-3-5-haiku-latest",
                api_key_env="ANTHROPIC_API_KEY",
                parameters=ModelParameters(temperature=0.5),
            ),
        },
    )
