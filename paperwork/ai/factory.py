from typing import ClassVar

from paperwork.ai.client_base import BaseChatClient
from paperwork.ai.example_client_adapter import ExampleClientAdapter
from paperwork.ai.exceptions import ProviderUnavailableError
from paperwork.ai.openai_client_adapter import OpenAIClientAdapter
from paperwork.config.settings import Settings


class ChatClientFactory:
    """Creates the configured chat/vision client adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(cls, settings: Settings) -> BaseChatClient:
        """Create a configured client from application settings.

        Raises:
            ValueError: for an unknown provider or missing base URL.
            ProviderUnavailableError: if the provider needs an API key and none is set.
        """
        provider = settings.ai_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        return OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.ai_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.ai_openai_base_url.strip()
            if not url:
                raise ValueError(
                    "ai_openai_base_url is required for ai_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown AI provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key = settings.ai_openai_api_key.strip()
        if key:
            return key
        if provider in cls.KEYLESS_PROVIDERS:
            return provider
        raise ProviderUnavailableError(f"ai_openai_api_key is not configured for {provider}")
