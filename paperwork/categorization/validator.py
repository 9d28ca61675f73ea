"""Validates parsed categorization JSON."""

from typing import Any

from paperwork.categorization.exceptions import MalformedCategorizationError
from paperwork.categorization.models import CategorizationResponse

DEFAULT_CONFIDENCE = 0.5


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


def validate_categorization(data: dict[str, Any]) -> CategorizationResponse:
    """Validate raw parsed JSON and build a CategorizationResponse.

    Raises:
        MalformedCategorizationError: on any shape violation.
    """
    name = data.get("categoryName")
    if not isinstance(name, str) or not name.strip():
        raise MalformedCategorizationError("'categoryName' must be a non-empty string")

    confidence = data.get("confidence")
    if confidence is None:
        confidence = DEFAULT_CONFIDENCE
    elif isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise MalformedCategorizationError("'confidence' must be a number")

    rationale = data.get("rationale")
    if rationale is not None and not isinstance(rationale, str):
        raise MalformedCategorizationError("'rationale' must be a string")

    reuse_existing = data.get("reuseExisting")
    if reuse_existing is not None and not isinstance(reuse_existing, bool):
        raise MalformedCategorizationError("'reuseExisting' must be a boolean")

    return CategorizationResponse(
        category_name=name,
        confidence=clamp_confidence(float(confidence)),
        rationale=rationale,
        reuse_existing=reuse_existing,
    )
