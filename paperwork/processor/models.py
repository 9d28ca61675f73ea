from dataclasses import dataclass

from paperwork.database.models import DocumentRecord


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a full processing run."""

    ok: bool
    document_id: str
    error: str | None = None


@dataclass(frozen=True)
class CategorizationOutcome:
    """Outcome of a standalone categorization run."""

    ok: bool
    document_id: str
    document: DocumentRecord | None = None
    error: str | None = None


@dataclass(frozen=True)
class SweepItem:
    """Per-document line of a pending-categorization sweep."""

    id: str
    ok: bool
    error: str | None = None
