import re

from paperwork.extraction.models import ExtractedField

ALLOWED_SENSITIVE_FIELD_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"document type", re.IGNORECASE),
    re.compile(r"expiry", re.IGNORECASE),
    re.compile(r"expiration", re.IGNORECASE),
]


def is_allowed_sensitive_field(key: str) -> bool:
    return any(pattern.search(key) for pattern in ALLOWED_SENSITIVE_FIELD_PATTERNS)


def filter_sensitive_fields(fields: list[ExtractedField]) -> list[ExtractedField]:
    """Keep only low-risk fields of a document flagged as sensitive."""
    return [f for f in fields if is_allowed_sensitive_field(f.key)]
