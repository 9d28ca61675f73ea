from abc import ABC, abstractmethod

from paperwork.ai.models import ChatCompletion, ChatMessage


class BaseChatClient(ABC):
    """Contract for provider-specific chat/vision clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[ChatMessage],
    ) -> ChatCompletion:
        """Return the provider response as plain text.

        Raises:
            ProviderUnavailableError: missing or rejected credentials.
            ProviderNetworkError: transport or API failure.
            ProviderError: empty or unusable response.
        """
