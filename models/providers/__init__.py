"""Model providers package."""

from .providers import ProviderFactory
from .openai_provider import OpenAIProvider
from .anthropic_provider import AnthropicProvider
from .custom_provider import CustomProvider
from .base_model_provider import BaseModelProvider, GenerationResult, UsageMetadata
from .exceptions import ConfigurationError, ProviderError

__all__ = [
    "ProviderFactory",
    "OpenAIProvider",
    "AnthropicProvider",
    "CustomProvider",
    "BaseModelProvider",
    "GenerationResult",
    "UsageMetadata",
    "ConfigurationError",
    "ProviderError",
]
