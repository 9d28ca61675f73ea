import re

_TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    """Canonicalise line endings and blank runs of extracted text."""
    normalized = text.replace("\r\n", "\n")
    normalized = _TRAILING_SPACE_RE.sub("\n", normalized)
    normalized = _BLANK_RUN_RE.sub("\n\n", normalized)
    return normalized.strip()


def word_count(text: str) -> int:
    return len(text.split())
