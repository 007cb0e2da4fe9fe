from typing import TYPE_CHECKING

from .anthropic_provider import AnthropicProvider
from .base_model_provider import BaseModelProvider
from .custom_provider import CustomProvider
from .exceptions import ConfigurationError
from .openai_provider import OpenAIProvider

if TYPE_CHECKING:
    from config.settings import ApiConfig, SystemConfig


class ProviderFactory:
    """Factory for creating model providers."""

    _providers: dict[str, type[BaseModelProvider]] = {
        "openai": OpenAIProvider,
        "anthropic": AnthropicProvider,
        "custom": CustomProvider,
    }

    @classmethod
    def create_provider(
        cls, api_config: "ApiConfig", system_config: "SystemConfig"
    ) -> BaseModelProvider:
        """Create a provider instance for a credential configuration."""
        if api_config.provider not in cls._providers:
            raise ConfigurationError(
                f"Unknown provider: {api_config.provider}. Available: {list(cls._providers.keys())}"
            )

        provider_class = cls._providers[api_config.provider]
        return provider_class(api_config, system_config)

    @classmethod
    def get_available_providers(cls) -> list[str]:
        """Get list of available provider names."""
        return list(cls._providers.keys())
