import base64

from paperwork.ai.client_base import BaseChatClient
from paperwork.logging.logger import Log

_SYSTEM_PROMPT = (
    "Extract all readable text exactly as seen. Preserve lines. "
    "Do not invent. Return plain text only."
)


class VisionTextRecognizer:
    """Transcribes an image through a vision-capable chat model."""

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        max_tokens: int = 1200,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens

    async def recognize(
        self,
        image_bytes: bytes,
        mime_type: str,
        page_number: int | None = None,
    ) -> str:
        """Return the text visible in *image_bytes* ("" when none)."""
        encoded = base64.b64encode(image_bytes).decode("ascii")
        instruction = (
            f"OCR page {page_number} of this PDF."
            if page_number is not None
            else "OCR this document image."
        )
        completion = await self._client.create_chat_completion(
            model=self._model,
            temperature=0.0,
            max_tokens=self._max_tokens,
            messages=[
                {"role": "system", "content": _SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": instruction},
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{mime_type};base64,{encoded}"},
                        },
                    ],
                },
            ],
        )
        Log.debug(f"Vision OCR returned {len(completion.content)} chars")
        return completion.content.strip()
