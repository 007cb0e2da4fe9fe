from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.settings import ApiConfig, SystemConfig


@dataclass
class UsageMetadata:
    """Token usage reported by a provider."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


@dataclass
class GenerationResult:
    """Generated text plus usage metadata, shared by every provider."""

    content: str
    model: str
    provider: str
    usage: UsageMetadata | None = None
    generation_time_ms: int | None = None


class BaseModelProvider(ABC):
    """Abstract base class for model providers.

    One instance is created per credential configuration when the model
    manager registers it.
    """

    def __init__(self, api_config: "ApiConfig", system_config: "SystemConfig"):
        self.api_config = api_config
        self.system_config = system_config

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider."""
        pass

    @abstractmethod
    async def generate_response(
        self, prompt: str, context: str | None = None
    ) -> GenerationResult:
        """Generate a response for the prompt.

        Args:
            prompt: Fully rendered prompt
            context: Optional extra context sent alongside the prompt

        Raises:
            ProviderError: on any transport or provider failure
        """
        pass

    def validate_api_config(self, api_config: "ApiConfig") -> bool:
        """Validate that a configuration is compatible with this provider."""
        return api_config.provider == self.provider_name

    async def aclose(self) -> None:
        """Release any network resources held by the provider."""
        return None
