import httpx
import openai

from paperwork.ai.client_base import BaseChatClient
from paperwork.ai.exceptions import (
    ProviderError,
    ProviderNetworkError,
    ProviderUnavailableError,
)
from paperwork.ai.models import ChatCompletion, ChatMessage


class OpenAIClientAdapter(BaseChatClient):
    """Chat/vision client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[ChatMessage],
    ) -> ChatCompletion:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise ProviderUnavailableError(
                f"AI provider rejected credentials: {exc}"
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise ProviderNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise ProviderError("AI returned no choices")
        content = response.choices[0].message.content
        return ChatCompletion(content=(content or "").strip(), model=response.model or model)
