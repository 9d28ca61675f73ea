from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from paperwork.ai.exceptions import ProviderError, ProviderNetworkError, ProviderUnavailableError
from paperwork.ai.openai_client_adapter import OpenAIClientAdapter

MESSAGES = [{"role": "system", "content": "system"}, {"role": "user", "content": "user"}]


def _make_mock_response(content: str | None, model: str = "gpt-4.1-mini") -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    response.model = model
    return response


def _make_adapter(mock_client: MagicMock) -> OpenAIClientAdapter:
    with patch(
        "paperwork.ai.openai_client_adapter.openai.AsyncOpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)


def _mock_client(**create_kwargs: object) -> MagicMock:
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(**create_kwargs)
    return mock_client


async def _call(adapter: OpenAIClientAdapter):  # type: ignore[no-untyped-def]
    return await adapter.create_chat_completion(
        model="m", temperature=0.1, max_tokens=200, messages=MESSAGES
    )


class TestOpenAIClientAdapter:
    async def test_returns_stripped_content_and_model(self) -> None:
        mock_client = _mock_client(return_value=_make_mock_response('  {"ok": true}\n'))
        adapter = _make_adapter(mock_client)

        completion = await _call(adapter)

        assert completion.content == '{"ok": true}'
        assert completion.model == "gpt-4.1-mini"
        mock_client.chat.completions.create.assert_awaited_once_with(
            model="m", temperature=0.1, max_tokens=200, messages=MESSAGES
        )

    async def test_empty_content_becomes_empty_string(self) -> None:
        adapter = _make_adapter(_mock_client(return_value=_make_mock_response(None)))
        completion = await _call(adapter)
        assert completion.content == ""

    async def test_falls_back_to_requested_model(self) -> None:
        adapter = _make_adapter(_mock_client(return_value=_make_mock_response("x", model="")))
        completion = await _call(adapter)
        assert completion.model == "m"

    async def test_raises_provider_error_without_choices(self) -> None:
        response = MagicMock()
        response.choices = []
        adapter = _make_adapter(_mock_client(return_value=response))
        with pytest.raises(ProviderError, match="no choices"):
            await _call(adapter)

    async def test_raises_network_error_on_connection_failure(self) -> None:
        adapter = _make_adapter(
            _mock_client(side_effect=openai.APIConnectionError(request=MagicMock()))
        )
        with pytest.raises(ProviderNetworkError, match="network error"):
            await _call(adapter)

    async def test_raises_network_error_on_timeout(self) -> None:
        adapter = _make_adapter(_mock_client(side_effect=httpx.TimeoutException("timeout")))
        with pytest.raises(ProviderNetworkError, match="network error"):
            await _call(adapter)

    async def test_raises_network_error_on_api_error(self) -> None:
        adapter = _make_adapter(
            _mock_client(
                side_effect=openai.APIError(message="server error", request=MagicMock(), body=None)
            )
        )
        with pytest.raises(ProviderNetworkError, match="API error"):
            await _call(adapter)

    async def test_raises_unavailable_on_rejected_credentials(self) -> None:
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        error = openai.AuthenticationError(
            "bad key", response=httpx.Response(401, request=request), body=None
        )
        adapter = _make_adapter(_mock_client(side_effect=error))
        with pytest.raises(ProviderUnavailableError, match="rejected credentials"):
            await _call(adapter)
