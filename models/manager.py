"""Model manager with multi-provider support."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from config.settings import ApiConfig, SystemConfig

from .providers.base_model_provider import BaseModelProvider, GenerationResult
from .providers.exceptions import ConfigurationError
from .providers.providers import ProviderFactory

logger = logging.getLogger(__name__)


class ModelManager:
    """Routes generation requests to the provider bound to each credential config.

    Providers are selected once, when a configuration is registered, never per
    call.
    """

    def __init__(self, system_config: SystemConfig):
        self._system_config = system_config
        self._providers: dict[str, BaseModelProvider] = {}

    def register_config(self, config: ApiConfig) -> None:
        """Create and cache the provider for a credential configuration."""
        if not config.is_active:
            raise ConfigurationError(f"API config '{config.id}' is inactive")

        try:
            provider = ProviderFactory.create_provider(config, self._system_config)
            if not provider.validate_api_config(config):
                raise ConfigurationError(
                    f"Invalid API config for provider {config.provider}"
                )
        except ConfigurationError as exc:
            logger.error("Failed to register API config %s: %s", config.id, exc)
            raise

        self.register_provider(config, provider)

    def register_provider(self, config: ApiConfig, provider: BaseModelProvider) -> None:
        """Bind an already constructed provider to a configuration."""
        self._providers[config.id] = provider
        logger.info("Registered API config %s: %s (%s)", config.id, config.model, config.provider)

    def is_registered(self, config_id: str) -> bool:
        return config_id in self._providers

    async def generate_response(
        self, config_id: str, prompt: str, context: str | None = None
    ) -> GenerationResult:
        """Generate a response with the provider registered for config_id.

        Raises:
            ConfigurationError: if no provider is registered for config_id
            ProviderError: if the provider call fails
        """
        if config_id not in self._providers:
            raise ConfigurationError(f"API config '{config_id}' not registered")

        provider = self._providers[config_id]
        result = await provider.generate_response(prompt, context)
        logger.debug(
            "Generated %s chars from %s (%s)", len(result.content), config_id, provider.provider_name
        )
        return result

    @asynccontextmanager
    async def model_session(self, config_id: str) -> AsyncIterator["ModelManager"]:
        """Create a session context for model operations."""
        if config_id not in self._providers:
            raise ConfigurationError(f"API config '{config_id}' not registered")

        logger.debug("Starting session for API config %s", config_id)
        try:
            yield self
        finally:
            logger.debug("Ending session for API config %s", config_id)

    async def aclose(self) -> None:
        """Close every provider client."""
        for config_id, provider in self._providers.items():
            try:
                await provider.aclose()
            except Exception as e:
                logger.warning(f"Failed to close provider for {config_id}: {e}")
