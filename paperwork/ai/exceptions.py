class ProviderError(Exception):
    """Raised when the AI provider call fails."""


class ProviderUnavailableError(ProviderError):
    """Raised when the provider is not configured or rejects our credentials."""


class ProviderNetworkError(ProviderError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class JsonResponseError(ValueError):
    """Raised when a provider response holds no usable JSON object."""


class PromptLoadError(Exception):
    """Raised when a bundled prompt template cannot be read."""
