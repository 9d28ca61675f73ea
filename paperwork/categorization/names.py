import re
from collections.abc import Iterable

from paperwork.database.models import CategoryRecord

MAX_CATEGORY_NAME_CHARS = 40

_WHITESPACE_RE = re.compile(r"\s+")
_WORD_START_RE = re.compile(r"\b\w")


def normalize_category_name(name: str) -> str:
    """Canonical display form used to compare category names.

    "  BANKING  " and "banking" both become "Banking".
    """
    collapsed = _WHITESPACE_RE.sub(" ", name.strip())
    if not collapsed:
        return ""
    title_cased = _WORD_START_RE.sub(lambda m: m.group().upper(), collapsed.lower())
    return title_cased[:MAX_CATEGORY_NAME_CHARS]


def match_category(
    name: str,
    categories: Iterable[CategoryRecord],
) -> CategoryRecord | None:
    """Return the first category whose normalized name equals *name*'s."""
    normalized = normalize_category_name(name)
    if not normalized:
        return None
    for category in categories:
        if normalize_category_name(category.name) == normalized:
            return category
    return None
