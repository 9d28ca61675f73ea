from dataclasses import dataclass
from typing import Any

ChatMessage = dict[str, Any]


@dataclass(frozen=True)
class ChatCompletion:
    """Text returned by the provider and the model that produced it."""

    content: str
    model: str
