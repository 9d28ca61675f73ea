from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any


class DocumentStatus(StrEnum):
    """Lifecycle of raw document processing."""

    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    READY = "READY"
    FAILED = "FAILED"


class AiStatus(StrEnum):
    """Lifecycle of the AI-derived category label."""

    PENDING = "PENDING"
    CATEGORIZING = "CATEGORIZING"
    READY = "READY"
    FAILED = "FAILED"


@dataclass
class CategoryRecord:
    """Represents a row from the categories table."""

    id: str
    workspace_id: str
    name: str


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    workspace_id: str
    file_name: str | None = None
    title: str | None = None
    mime_type: str | None = None
    storage_key: str | None = None
    status: DocumentStatus = DocumentStatus.UPLOADED
    ai_status: AiStatus = AiStatus.PENDING
    category_id: str | None = None
    category_label: str | None = None
    raw_text: str | None = None
    ocr_pages: list[str] = field(default_factory=list)
    extract_data: dict[str, Any] | None = None
    sensitive_detected: bool = False
    processing_error: str | None = None
    processed_at: datetime | None = None
    ai_confidence: float | None = None
    ai_meta_json: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    category: CategoryRecord | None = None


@dataclass
class ExtractedFieldRecord:
    """Represents a row from the extracted_fields table."""

    document_id: str
    key: str
    value_text: str | None = None
    value_number: float | None = None
    value_date: date | None = None
    confidence: float | None = None
    source_snippet: str | None = None
    source_page: int | None = None
