"""Policies for turning a suggested category name into document columns.

Full processing stores the extractor's free-text category as the label and
leaves category_id alone. Standalone categorization normalizes the name and
links the document to an existing workspace category with the same
normalized name. Both behaviours are kept as named policies.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from paperwork.categorization.names import match_category, normalize_category_name
from paperwork.database.models import CategoryRecord


class CategoryLabelPolicy(StrEnum):
    EXTRACTOR_VERBATIM = "extractor_verbatim"
    WORKSPACE_DEDUP = "workspace_dedup"


@dataclass(frozen=True)
class ResolvedCategory:
    label: str | None
    category_id: str | None = None
    links_category: bool = False


def resolve_category(
    policy: CategoryLabelPolicy,
    name: str | None,
    categories: Sequence[CategoryRecord] = (),
) -> ResolvedCategory:
    if policy is CategoryLabelPolicy.EXTRACTOR_VERBATIM:
        return ResolvedCategory(label=(name or "").strip() or None)

    normalized = normalize_category_name(name or "")
    if not normalized:
        return ResolvedCategory(label=None, category_id=None, links_category=True)
    matched = match_category(normalized, categories)
    return ResolvedCategory(
        label=normalized,
        category_id=matched.id if matched else None,
        links_category=True,
    )
