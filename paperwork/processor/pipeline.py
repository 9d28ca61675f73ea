from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from paperwork.database.models import DocumentRecord
from paperwork.extraction.models import ExtractedField, ExtractionResult
from paperwork.ocr.models import TextExtractionResult
from paperwork.sensitive.models import SensitiveMatch


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    document: DocumentRecord | None = None
    raw_bytes: bytes = b""
    text_result: TextExtractionResult | None = None
    normalized_text: str = ""
    sensitive_match: SensitiveMatch = field(
        default_factory=lambda: SensitiveMatch(matched=False)
    )
    extraction: ExtractionResult = field(default_factory=ExtractionResult)
    fields: list[ExtractedField] = field(default_factory=list)
    resolved_title: str | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
