from datetime import datetime, timezone

from paperwork.database.models import (
    AiStatus,
    CategoryRecord,
    DocumentRecord,
    DocumentStatus,
    ExtractedFieldRecord,
)
from paperwork.database.repositories.categories_repository import CategoriesRepository
from paperwork.database.repositories.documents_repository import DocumentsRepository
from paperwork.database.repositories.extracted_fields_repository import (
    ExtractedFieldsRepository,
)
from paperwork.extraction.field_extractor import FieldExtractor
from paperwork.extraction.models import ExtractionResult
from paperwork.extraction.sensitive_filter import filter_sensitive_fields
from paperwork.logging.logger import Log
from paperwork.ocr.text_extractor import TextExtractor
from paperwork.ocr.text_normalizer import normalize_text
from paperwork.processor.category_labels import CategoryLabelPolicy, resolve_category
from paperwork.processor.exceptions import MissingStorageKeyError, ProcessingFailedError
from paperwork.processor.file_loader import FileLoader
from paperwork.processor.pipeline import PipelineContext, PipelineStep
from paperwork.sensitive.detector import detect_sensitive_content


def _require_document(context: PipelineContext, step: str) -> DocumentRecord:
    if context.document is None:
        raise ProcessingFailedError(f"PipelineContext.document must be set before {step}")
    return context.document


class LoadDocumentStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.document = await self._doc_repo.find_by_id(context.document_id)
        Log.info(f"Loaded document {context.document_id}")
        return context


class MarkProcessingStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    async def run(self, context: PipelineContext) -> PipelineContext:
        await self._doc_repo.update(
            context.document_id,
            status=DocumentStatus.PROCESSING,
            ai_status=AiStatus.PENDING,
            processing_error=None,
        )
        Log.info(f"Document {context.document_id} marked as processing")
        return context


class ReadStoredFileStep(PipelineStep):
    def __init__(self, file_loader: FileLoader) -> None:
        self._file_loader = file_loader

    async def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "reading the stored file")
        if not document.storage_key:
            raise MissingStorageKeyError(f"Document {document.id} has no storage key")
        context.raw_bytes = self._file_loader.read(document.storage_key)
        Log.info(f"Read {len(context.raw_bytes)} bytes for document {document.id}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "text extraction")
        context.text_result = await self._text_extractor.extract(
            context.raw_bytes, document.mime_type
        )
        Log.info(
            f"Extracted {len(context.text_result.text)} chars "
            f"({len(context.text_result.pages)} pages) from document {document.id}"
        )
        return context


class NormalizeTextStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.text_result is None:
            raise ProcessingFailedError(
                "PipelineContext.text_result must be set before normalization"
            )
        context.normalized_text = normalize_text(context.text_result.text)
        return context


class DetectSensitiveStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "sensitive detection")
        context.sensitive_match = detect_sensitive_content(
            context.normalized_text, document.file_name
        )
        if context.sensitive_match.matched:
            Log.info(
                f"Document {document.id} flagged sensitive: {context.sensitive_match.reason}"
            )
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(self, field_extractor: FieldExtractor) -> None:
        self._field_extractor = field_extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        if not context.normalized_text:
            Log.info(f"Document {context.document_id} has no text, skipping field extraction")
            context.extraction = ExtractionResult()
            return context
        context.extraction = await self._field_extractor.extract(
            context.normalized_text, context.sensitive_match.matched
        )
        return context


class FilterSensitiveFieldsStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        fields = context.extraction.fields
        context.fields = (
            filter_sensitive_fields(fields) if context.sensitive_match.matched else list(fields)
        )
        return context


class ReplaceExtractedFieldsStep(PipelineStep):
    def __init__(self, fields_repo: ExtractedFieldsRepository) -> None:
        self._fields_repo = fields_repo

    async def run(self, context: PipelineContext) -> PipelineContext:
        records = [
            ExtractedFieldRecord(
                document_id=context.document_id,
                key=f.key,
                value_text=f.value_text,
                value_number=f.value_number,
                value_date=f.value_date,
                confidence=f.confidence,
                source_snippet=f.source_snippet,
                source_page=f.source_page,
            )
            for f in context.fields
        ]
        await self._fields_repo.replace_for_document(context.document_id, records)
        Log.info(f"Stored {len(records)} extracted fields for document {context.document_id}")
        return context


class ResolveTitleStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "title resolution")
        if document.title and document.title != document.file_name:
            context.resolved_title = document.title
            return context
        suggested = (context.extraction.title or "").strip()
        context.resolved_title = suggested or document.title
        return context


class PersistReadyStep(PipelineStep):
    def __init__(
        self,
        doc_repo: DocumentsRepository,
        categories_repo: CategoriesRepository,
        label_policy: CategoryLabelPolicy = CategoryLabelPolicy.EXTRACTOR_VERBATIM,
    ) -> None:
        self._doc_repo = doc_repo
        self._categories_repo = categories_repo
        self._label_policy = label_policy

    async def run(self, context: PipelineContext) -> PipelineContext:
        document = _require_document(context, "persisting results")
        categories: list[CategoryRecord] = []
        if self._label_policy is CategoryLabelPolicy.WORKSPACE_DEDUP:
            categories = await self._categories_repo.list_for_workspace(document.workspace_id)
        resolved = resolve_category(self._label_policy, context.extraction.category, categories)

        extraction = ExtractionResult(
            title=context.extraction.title,
            category=context.extraction.category,
            fields=context.fields,
        )
        values = {
            "status": DocumentStatus.READY,
            "ai_status": AiStatus.READY,
            "title": context.resolved_title,
            "category_label": resolved.label,
            "raw_text": context.normalized_text,
            "ocr_pages": context.text_result.pages if context.text_result else [],
            "extract_data": extraction.to_payload(),
            "sensitive_detected": context.sensitive_match.matched,
            "processing_error": None,
            "processed_at": datetime.now(timezone.utc),
        }
        if resolved.links_category:
            values["category_id"] = resolved.category_id
        await self._doc_repo.update(context.document_id, **values)
        Log.info(f"Document {context.document_id} marked as ready")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, doc_repo: DocumentsRepository) -> None:
        self._doc_repo = doc_repo

    async def run(self, context: PipelineContext) -> PipelineContext:
        await self._doc_repo.update(
            context.document_id,
            status=DocumentStatus.FAILED,
            ai_status=AiStatus.FAILED,
            processing_error=context.error_message,
            processed_at=datetime.now(timezone.utc),
        )
        Log.error(f"Document {context.document_id} marked as failed: {context.error_message}")
        return context
