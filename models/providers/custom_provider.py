"""Provider for self-hosted or third-party endpoints with a simple JSON contract."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from .base_model_provider import BaseModelProvider, GenerationResult, UsageMetadata
from .exceptions import ConfigurationError, ProviderError

if TYPE_CHECKING:
    from config.settings import ApiConfig, SystemConfig

logger = logging.getLogger(__name__)


class CustomProvider(BaseModelProvider):
    """POSTs ``{"prompt", "model", **parameters}`` to the configured URL.

    The endpoint answers with ``{"content": ...}`` or ``{"response": ...}`` and
    an optional ``usage`` object.
    """

    def __init__(
        self,
        api_config: ApiConfig,
        system_config: SystemConfig,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(api_config, system_config)
        if not api_config.base_url:
            raise ConfigurationError(
                f"Custom provider '{api_config.id}' requires a base_url"
            )

        headers = {"Content-Type": "application/json"}
        api_key = api_config.resolve_api_key()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        self._client = client or httpx.AsyncClient(timeout=system_config.request_timeout)
        self._headers = headers

    @property
    def provider_name(self) -> str:
        return "custom"

    async def generate_response(
        self, prompt: str, context: str | None = None
    ) -> GenerationResult:
        """Generate a response from the custom endpoint."""
        full_prompt = f"{context}\n\n{prompt}" if context else prompt
        payload: dict[str, Any] = {
            "prompt": full_prompt,
            "model": self.api_config.model,
            **self.api_config.parameters.model_dump(),
        }

        start_time = time.time()
        try:
            response = await self._client.post(
                self.api_config.base_url, json=payload, headers=self._headers
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Custom provider request failed for {self.api_config.model}: {exc}")
            raise ProviderError(
                provider=self.provider_name,
                model=self.api_config.model,
                detail=exc.response.text or str(exc),
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Custom provider request failed for {self.api_config.model}: {exc}")
            raise ProviderError(
                provider=self.provider_name, model=self.api_config.model, detail=str(exc)
            ) from exc

        if not isinstance(data, dict):
            raise ProviderError(
                provider=self.provider_name,
                model=self.api_config.model,
                detail=f"Unexpected response payload: {type(data).__name__}",
            )

        content = data.get("content") or data.get("response") or ""
        usage = None
        raw_usage = data.get("usage")
        if isinstance(raw_usage, dict):
            usage = UsageMetadata(
                prompt_tokens=raw_usage.get("prompt_tokens"),
                completion_tokens=raw_usage.get("completion_tokens"),
                total_tokens=raw_usage.get("total_tokens"),
            )

        return GenerationResult(
            content=str(content),
            model=self.api_config.model,
            provider=self.provider_name,
            usage=usage,
            generation_time_ms=int((time.time() - start_time) * 1000),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
