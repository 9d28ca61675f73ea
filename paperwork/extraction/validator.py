"""Validates parsed extraction JSON and builds an ExtractionResult."""

from datetime import date
from typing import Any

from dateutil import parser as dateutil_parser

from paperwork.extraction.exceptions import MalformedExtractionError
from paperwork.extraction.models import ExtractedField, ExtractionResult

MAX_SOURCE_SNIPPET_CHARS = 160


def validate_extraction(data: dict[str, Any]) -> ExtractionResult:
    """Validate raw parsed JSON against the extraction shape.

    Raises:
        MalformedExtractionError: on any shape violation.
    """
    title = _optional_str(data.get("title"), "'title'")
    category = _optional_str(data.get("category"), "'category'")
    raw_fields = data.get("fields", [])
    if raw_fields is None:
        raw_fields = []
    if not isinstance(raw_fields, list):
        raise MalformedExtractionError("'fields' must be a list")
    fields = [_build_field(item, i) for i, item in enumerate(raw_fields)]
    return ExtractionResult(title=title, category=category, fields=fields)


def parse_lenient_date(raw: str | None) -> date | None:
    """Parse a calendar date, returning None when it is not one."""
    if not raw:
        return None
    try:
        return dateutil_parser.parse(raw).date()
    except (ValueError, OverflowError):
        return None


def _build_field(raw: Any, index: int) -> ExtractedField:
    if not isinstance(raw, dict):
        raise MalformedExtractionError(f"Field at index {index} must be an object")
    key = raw.get("key")
    if not key or not isinstance(key, str):
        raise MalformedExtractionError(
            f"Field at index {index}: 'key' must be a non-empty string"
        )
    prefix = f"Field at index {index}:"
    value_date = _optional_str(raw.get("valueDate"), f"{prefix} 'valueDate'")
    snippet = _optional_str(raw.get("sourceSnippet"), f"{prefix} 'sourceSnippet'")
    return ExtractedField(
        key=key,
        value_text=_optional_str(raw.get("valueText"), f"{prefix} 'valueText'"),
        value_number=_optional_number(raw.get("valueNumber"), f"{prefix} 'valueNumber'"),
        value_date=parse_lenient_date(value_date),
        confidence=_build_confidence(raw.get("confidence"), prefix),
        source_snippet=snippet[:MAX_SOURCE_SNIPPET_CHARS] if snippet else snippet,
        source_page=_optional_int(raw.get("sourcePage"), f"{prefix} 'sourcePage'"),
    )


def _build_confidence(raw: Any, prefix: str) -> float | None:
    confidence = _optional_number(raw, f"{prefix} 'confidence'")
    if confidence is not None and not 0.0 <= confidence <= 1.0:
        raise MalformedExtractionError(f"{prefix} 'confidence' must be between 0 and 1")
    return confidence


def _optional_str(raw: Any, name: str) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise MalformedExtractionError(f"{name} must be a string or null")
    return raw


def _optional_number(raw: Any, name: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedExtractionError(f"{name} must be a number or null")
    return float(raw)


def _optional_int(raw: Any, name: str) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise MalformedExtractionError(f"{name} must be an integer or null")
    return raw
