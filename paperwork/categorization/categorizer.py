"""AI-powered document categorizer."""

from paperwork.ai.client_base import BaseChatClient
from paperwork.ai.exceptions import JsonResponseError
from paperwork.ai.json_response import extract_json_object
from paperwork.ai.models import ChatMessage
from paperwork.ai.prompt_loader import load_prompt_template
from paperwork.categorization.exceptions import MalformedCategorizationError
from paperwork.categorization.models import CategorizationInput, CategorizationResult
from paperwork.categorization.validator import validate_categorization
from paperwork.logging.logger import Log

RETRY_INSTRUCTION = "Return valid JSON only."
MAX_SNIPPET_CHARS = 500
_NONE = "(none)"


class Categorizer:
    """Asks the provider for a short category name for one document.

    A response that fails to parse or validate is retried once with an extra
    system message asking for JSON only; a second failure is raised.
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 200,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._system_prompt = load_prompt_template("categorization_system.txt").strip()
        self._prompt_template = load_prompt_template("categorization_prompt.txt")

    async def categorize(self, data: CategorizationInput) -> CategorizationResult:
        """Return the category suggested for *data*.

        Raises:
            MalformedCategorizationError: if both attempts return invalid JSON.
        """
        messages: list[ChatMessage] = [
            {"role": "system", "content": self._system_prompt},
            {"role": "user", "content": self.build_prompt(data)},
        ]

        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            completion = await self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                messages=list(messages),
            )
            Log.debug(f"AI raw categorization response (attempt {attempt}):\n{completion.content}")
            try:
                response = validate_categorization(extract_json_object(completion.content))
            except (JsonResponseError, MalformedCategorizationError) as exc:
                if attempt == self.MAX_ATTEMPTS:
                    raise MalformedCategorizationError(
                        f"Invalid categorization response after {attempt} attempts: {exc}"
                    ) from exc
                Log.warning(f"Retrying categorization, attempt {attempt} was malformed: {exc}")
                messages.append({"role": "system", "content": RETRY_INSTRUCTION})
                continue

            Log.info(
                f"Categorized as '{response.category_name}' "
                f"(confidence {response.confidence:.2f}, attempt {attempt})"
            )
            return CategorizationResult(
                category_name=response.category_name,
                confidence=response.confidence,
                rationale=response.rationale,
                reuse_existing=response.reuse_existing,
                raw_response=completion.content,
                model=completion.model or self._model,
            )

        raise MalformedCategorizationError("Categorization made no attempts")

    def build_prompt(self, data: CategorizationInput) -> str:
        snippet = data.snippet[:MAX_SNIPPET_CHARS] if data.snippet else None
        return self._prompt_template.format(
            filename=data.filename or _NONE,
            note=data.note or _NONE,
            issuer=data.issuer or _NONE,
            snippet=snippet or _NONE,
            existing_categories=", ".join(data.existing_categories) or _NONE,
        )
