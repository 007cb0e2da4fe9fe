"""Errors raised by model providers and the model manager."""


class ProviderError(Exception):
    """An upstream AI call failed or returned unusable content.

    Providers raise this for every transport or API failure and never retry;
    callers decide whether to skip the turn or scoring pairing.
    """

    def __init__(
        self,
        *,
        provider: str,
        model: str,
        detail: str,
        status_code: int | None = None,
    ):
        self.provider = provider
        self.model = model
        self.detail = detail
        self.status_code = status_code
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{provider} error for {model}{status}: {detail}")


class ConfigurationError(Exception):
    """A referenced credential or model configuration is missing or unusable."""
