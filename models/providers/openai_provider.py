"""OpenAI chat completions provider."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from openai import APIStatusError, AsyncOpenAI

from .base_model_provider import BaseModelProvider, GenerationResult, UsageMetadata
from .exceptions import ConfigurationError, ProviderError

if TYPE_CHECKING:
    from config.settings import ApiConfig, SystemConfig

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant."


def usage_from_response(response: Any) -> UsageMetadata | None:
    """Map an OpenAI-style usage block into the shared shape."""
    usage = getattr(response, "usage", None)
    if usage is None:
        return None
    return UsageMetadata(
        prompt_tokens=getattr(usage, "prompt_tokens", None),
        completion_tokens=getattr(usage, "completion_tokens", None),
        total_tokens=getattr(usage, "total_tokens", None),
    )


class OpenAIProvider(BaseModelProvider):
    """OpenAI model provider implementation."""

    default_base_url = "https://api.openai.com/v1"

    def __init__(
        self,
        api_config: ApiConfig,
        system_config: SystemConfig,
        client: Any | None = None,
    ):
        super().__init__(api_config, system_config)

        if client is not None:
            self._client = client
            return

        api_key = api_config.resolve_api_key()
        if not api_key:
            raise ConfigurationError(
                f"No API key configured for '{api_config.id}'. Set api_key or api_key_env."
            )

        # Retries are left to the engine, which skips failed turns instead
        self._client = AsyncOpenAI(
            base_url=api_config.base_url or self.default_base_url,
            api_key=api_key,
            timeout=system_config.request_timeout,
            max_retries=0,
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    def _build_messages(self, prompt: str, context: str | None) -> list[dict[str, str]]:
        messages = [{"role": "system", "content": DEFAULT_SYSTEM_PROMPT}]
        if context:
            messages.append({"role": "user", "content": f"Context: {context}"})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _sampling_params(self) -> dict[str, float | int]:
        params = self.api_config.parameters
        return {
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
            "top_p": params.top_p,
            "frequency_penalty": params.frequency_penalty,
            "presence_penalty": params.presence_penalty,
        }

    async def generate_response(
        self, prompt: str, context: str | None = None
    ) -> GenerationResult:
        """Generate a response using chat completions."""
        start_time = time.time()

        try:
            response = await self._client.chat.completions.create(
                model=self.api_config.model,
                messages=self._build_messages(prompt, context),
                **self._sampling_params(),
            )
        except APIStatusError as exc:
            logger.error(f"OpenAI generation failed for {self.api_config.model}: {exc}")
            raise ProviderError(
                provider=self.provider_name,
                model=self.api_config.model,
                detail=exc.message,
                status_code=exc.status_code,
            ) from exc
        except Exception as exc:
            logger.error(f"OpenAI generation failed for {self.api_config.model}: {exc}")
            raise ProviderError(
                provider=self.provider_name, model=self.api_config.model, detail=str(exc)
            ) from exc

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        logger.debug(
            "Generated %s chars from OpenAI model %s", len(content), self.api_config.model
        )
        return GenerationResult(
            content=content,
            model=self.api_config.model,
            provider=self.provider_name,
            usage=usage_from_response(response),
            generation_time_ms=int((time.time() - start_time) * 1000),
        )

    async def aclose(self) -> None:
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()
