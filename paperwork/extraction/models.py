from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class ExtractedField:
    """One structured fact pulled from a document."""

    key: str
    value_text: str | None = None
    value_number: float | None = None
    value_date: date | None = None
    confidence: float | None = None
    source_snippet: str | None = None
    source_page: int | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "valueText": self.value_text,
            "valueNumber": self.value_number,
            "valueDate": self.value_date.isoformat() if self.value_date else None,
            "confidence": self.confidence,
            "sourceSnippet": self.source_snippet,
            "sourcePage": self.source_page,
        }


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the structured field extractor."""

    title: str | None = None
    category: str | None = None
    fields: list[ExtractedField] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready form stored in the document's extract_data column."""
        return {
            "title": self.title,
            "category": self.category,
            "fields": [f.to_payload() for f in self.fields],
        }
