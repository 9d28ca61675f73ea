"""AI-powered structured field extractor."""

from pathlib import Path

from paperwork.ai.client_base import BaseChatClient
from paperwork.ai.exceptions import JsonResponseError
from paperwork.ai.json_response import extract_json_object
from paperwork.ai.prompt_loader import load_prompt_template
from paperwork.extraction.exceptions import MalformedExtractionError
from paperwork.extraction.models import ExtractionResult
from paperwork.extraction.sensitive_filter import filter_sensitive_fields
from paperwork.extraction.validator import validate_extraction
from paperwork.logging.logger import Log

SENSITIVE_RULE = (
    "- Sensitive document detected: only include low-risk fields "
    "(document type, expiry date) and keep confidence low."
)
DEFAULT_RULE = "- If unsure, omit the field."


class FieldExtractor:
    """Turns normalized document text into title, category and fields."""

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        max_chars: int = 10000,
        temperature: float = 0.2,
        max_tokens: int = 800,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._max_chars = max_chars
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._system_prompt = load_prompt_template("extraction_system.txt").strip()
        self._prompt_template = load_prompt_template(
            "extraction_prompt.txt", prompt_template_path
        )

    async def extract(self, text: str, is_sensitive: bool) -> ExtractionResult:
        """Ask the provider for structured fields of *text*.

        When *is_sensitive* is set, fields outside the low-risk allowlist are
        dropped from the result whatever the provider returned.

        Raises:
            MalformedExtractionError: if the response is not a valid payload.
        """
        prompt = self.build_prompt(text, is_sensitive)
        Log.debug(f"Extraction prompt:\n{prompt}")

        completion = await self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            messages=[
                {"role": "system", "content": self._system_prompt},
                {"role": "user", "content": prompt},
            ],
        )
        Log.debug(f"AI raw extraction response:\n{completion.content}")

        try:
            result = validate_extraction(extract_json_object(completion.content))
        except JsonResponseError as exc:
            raise MalformedExtractionError(str(exc)) from exc

        if is_sensitive:
            kept = filter_sensitive_fields(result.fields)
            if len(kept) != len(result.fields):
                Log.info(
                    f"Dropped {len(result.fields) - len(kept)} fields of a sensitive document"
                )
            result = ExtractionResult(title=result.title, category=result.category, fields=kept)

        Log.info(f"Extraction complete: {len(result.fields)} fields extracted")
        return result

    def build_prompt(self, text: str, is_sensitive: bool) -> str:
        return self._prompt_template.format(
            sensitivity_rule=SENSITIVE_RULE if is_sensitive else DEFAULT_RULE,
            ocr_text=text[: self._max_chars],
        )
