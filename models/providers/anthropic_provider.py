"""Anthropic provider implementation using OpenAI SDK."""

from __future__ import annotations

from .openai_provider import OpenAIProvider


class AnthropicProvider(OpenAIProvider):
    """Anthropic model provider using OpenAI SDK compatibility.

    Anthropic exposes an OpenAI-compatible chat completions endpoint, so only
    the base URL and the message layout differ from the OpenAI provider.
    """

    default_base_url = "https://api.anthropic.com/v1/"

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def _build_messages(self, prompt: str, context: str | None) -> list[dict[str, str]]:
        full_prompt = f"{context}\n\n{prompt}" if context else prompt
        return [{"role": "user", "content": full_prompt}]

    def _sampling_params(self) -> dict[str, float | int]:
        params = self.api_config.parameters
        return {"temperature": params.temperature, "max_tokens": params.max_tokens}
