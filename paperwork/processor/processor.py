from pathlib import Path

from paperwork.ai.client_base import BaseChatClient
from paperwork.ai.factory import ChatClientFactory
from paperwork.config.settings import Settings
from paperwork.database.repositories.categories_repository import CategoriesRepository
from paperwork.database.repositories.documents_repository import DocumentsRepository
from paperwork.database.repositories.extracted_fields_repository import (
    ExtractedFieldsRepository,
)
from paperwork.extraction.field_extractor import FieldExtractor
from paperwork.logging.logger import Log
from paperwork.ocr.text_extractor import TextExtractor
from paperwork.ocr.vision import VisionTextRecognizer
from paperwork.pdf.factory import PdfExtractorFactory
from paperwork.processor.category_labels import CategoryLabelPolicy
from paperwork.processor.exceptions import DocumentBusyError
from paperwork.processor.file_loader import FileLoader
from paperwork.processor.locks import DocumentLocks
from paperwork.processor.models import ProcessResult
from paperwork.processor.pipeline import PipelineContext, PipelineStep
from paperwork.processor.steps import (
    DetectSensitiveStep,
    ExtractFieldsStep,
    ExtractTextStep,
    FilterSensitiveFieldsStep,
    LoadDocumentStep,
    MarkFailedStep,
    MarkProcessingStep,
    NormalizeTextStep,
    PersistReadyStep,
    ReadStoredFileStep,
    ReplaceExtractedFieldsStep,
    ResolveTitleStep,
)


class DocumentProcessor:
    """Runs the full processing pipeline for one document.

    Pipeline: load -> mark processing -> read file -> extract text ->
    normalize -> detect sensitive -> extract fields -> filter -> store
    fields -> resolve title -> mark ready.

    Any exception after the document is loaded runs ``failed_step`` so the
    document ends up FAILED with the error message. Nothing is raised to the
    caller; the outcome comes back as a ProcessResult.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep,
        locks: DocumentLocks | None = None,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step
        self._locks = locks if locks is not None else DocumentLocks()

    async def process_document(self, document_id: str) -> ProcessResult:
        with Log.bind_document(document_id):
            Log.info(f"Processing document {document_id}")
            try:
                async with self._locks.hold(document_id):
                    return await self._run(document_id)
            except DocumentBusyError as exc:
                Log.warning(str(exc))
                return ProcessResult(ok=False, document_id=document_id, error=str(exc))

    async def _run(self, document_id: str) -> ProcessResult:
        context = PipelineContext(document_id=document_id)
        try:
            for step in self._steps:
                context = await step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or exc.__class__.__name__
            if context.document is None:
                Log.error(f"Document {document_id} could not be loaded: {context.error_message}")
                return ProcessResult(
                    ok=False, document_id=document_id, error=context.error_message
                )
            try:
                await self._failed_step.run(context)
            except Exception:
                Log.exception(f"Could not mark document {document_id} as failed")
            return ProcessResult(ok=False, document_id=document_id, error=context.error_message)

        Log.info(f"Document {document_id} processed successfully")
        return ProcessResult(ok=True, document_id=document_id)


def build_processor(
    settings: Settings,
    *,
    client: BaseChatClient | None = None,
    locks: DocumentLocks | None = None,
    files_root: Path | None = None,
) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    client = client if client is not None else ChatClientFactory.create(settings)
    doc_repo = DocumentsRepository()
    fields_repo = ExtractedFieldsRepository()
    categories_repo = CategoriesRepository()
    file_loader = FileLoader(
        files_root=files_root if files_root is not None else Path(settings.files_root)
    )
    text_extractor = TextExtractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        recognizer=VisionTextRecognizer(client=client, model=settings.ai_ocr_model),
        min_words=settings.ocr_min_words,
        max_pages=settings.ocr_max_pages,
    )
    field_extractor = FieldExtractor(
        client=client,
        model=settings.ai_extraction_model,
        max_chars=settings.extraction_max_chars,
    )
    steps: list[PipelineStep] = [
        LoadDocumentStep(doc_repo),
        MarkProcessingStep(doc_repo),
        ReadStoredFileStep(file_loader),
        ExtractTextStep(text_extractor),
        NormalizeTextStep(),
        DetectSensitiveStep(),
        ExtractFieldsStep(field_extractor),
        FilterSensitiveFieldsStep(),
        ReplaceExtractedFieldsStep(fields_repo),
        ResolveTitleStep(),
        PersistReadyStep(
            doc_repo,
            categories_repo,
            label_policy=CategoryLabelPolicy(settings.full_processing_label_policy),
        ),
    ]
    return DocumentProcessor(steps=steps, failed_step=MarkFailedStep(doc_repo), locks=locks)
