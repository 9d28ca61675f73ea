from dataclasses import dataclass, field


@dataclass(frozen=True)
class CategorizationInput:
    """Document metadata shown to the categorization model."""

    filename: str | None = None
    note: str | None = None
    issuer: str | None = None
    snippet: str | None = None
    existing_categories: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CategorizationResponse:
    """Validated body of one categorization response."""

    category_name: str
    confidence: float
    rationale: str | None = None
    reuse_existing: bool | None = None


@dataclass(frozen=True)
class CategorizationResult:
    """Output of the categorizer, with provenance for diagnostics."""

    category_name: str
    confidence: float
    raw_response: str
    model: str
    rationale: str | None = None
    reuse_existing: bool | None = None
