import json
from typing import Any

from paperwork.ai.exceptions import JsonResponseError


def extract_json_object(content: str) -> dict[str, Any]:
    """Parse the JSON object held in a provider response.

    The whole response is tried first. When the model wrapped the object in
    prose or code fences, the span from the first "{" to the last "}" is
    tried instead. The result is only a candidate: callers validate its shape.

    Raises:
        JsonResponseError: if no JSON object can be parsed.
    """
    cleaned = content.strip()
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        parsed = _parse_brace_span(cleaned)
    else:
        if not isinstance(parsed, dict):
            parsed = _parse_brace_span(cleaned)

    if not isinstance(parsed, dict):
        raise JsonResponseError("JSON response must be an object")
    return parsed


def _parse_brace_span(content: str) -> Any:
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end <= start:
        raise JsonResponseError("No JSON object found in response")
    try:
        return json.loads(content[start : end + 1])
    except json.JSONDecodeError as exc:
        raise JsonResponseError(f"Invalid JSON response: {exc}") from exc
