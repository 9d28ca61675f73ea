"""Example chat client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseChatClient and register the provider in ChatClientFactory.
"""

import json
from typing import ClassVar

from paperwork.ai.client_base import BaseChatClient
from paperwork.ai.models import ChatCompletion, ChatMessage


class ExampleClientAdapter(BaseChatClient):
    """Example adapter that answers every request with fixed content.

    No network calls. Image requests get an empty transcription; text
    requests get a JSON object that satisfies both the extraction and the
    categorization response shapes.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "title": None,
        "category": "Other",
        "fields": [],
        "categoryName": "Other",
        "confidence": 0.5,
        "rationale": "Offline example provider",
        "reuseExisting": False,
    }

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        messages: list[ChatMessage],
    ) -> ChatCompletion:
        _ = temperature, max_tokens
        if any(isinstance(message.get("content"), list) for message in messages):
            return ChatCompletion(content="", model=model)
        return ChatCompletion(content=json.dumps(self.DEFAULT_RESPONSE), model=model)
