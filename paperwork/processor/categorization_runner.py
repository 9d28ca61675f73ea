"""Standalone categorization of already-processed documents."""

from dataclasses import replace

from paperwork.ai.client_base import BaseChatClient
from paperwork.ai.factory import ChatClientFactory
from paperwork.categorization.categorizer import Categorizer
from paperwork.categorization.models import CategorizationInput
from paperwork.config.settings import Settings
from paperwork.database.models import AiStatus, DocumentRecord
from paperwork.database.repositories.categories_repository import CategoriesRepository
from paperwork.database.repositories.documents_repository import DocumentsRepository
from paperwork.logging.logger import Log
from paperwork.processor.category_labels import CategoryLabelPolicy, resolve_category
from paperwork.processor.exceptions import DocumentBusyError, DocumentNotFoundError
from paperwork.processor.locks import DocumentLocks
from paperwork.processor.models import CategorizationOutcome, SweepItem

MAX_SWEEP_LIMIT = 50
_PAGE_SEPARATOR = "\n\n"


class CategorizationRunner:
    """Assigns a workspace category label to one document or a batch."""

    def __init__(
        self,
        *,
        doc_repo: DocumentsRepository,
        categories_repo: CategoriesRepository,
        categorizer: Categorizer,
        locks: DocumentLocks | None = None,
        snippet_chars: int = 500,
        sweep_limit: int = 10,
    ) -> None:
        self._doc_repo = doc_repo
        self._categories_repo = categories_repo
        self._categorizer = categorizer
        self._locks = locks if locks is not None else DocumentLocks()
        self._snippet_chars = snippet_chars
        self._sweep_limit = sweep_limit

    async def run_categorization(self, document_id: str) -> CategorizationOutcome:
        """Categorize one document and persist the label.

        A normalized name equal to an existing workspace category (case
        insensitive) links the document to it; otherwise category_id is
        cleared. Failures are persisted as ai_status=FAILED and returned.
        """
        with Log.bind_document(document_id):
            try:
                async with self._locks.hold(document_id):
                    return await self._run(document_id)
            except DocumentBusyError as exc:
                Log.warning(str(exc))
                return CategorizationOutcome(
                    ok=False, document_id=document_id, error=str(exc)
                )

    async def categorize_pending(
        self, workspace_id: str, limit: int | None = None
    ) -> list[SweepItem]:
        """Categorize the oldest PENDING documents of a workspace one by one."""
        limit = self._sweep_limit if limit is None else limit
        limit = max(1, min(limit, MAX_SWEEP_LIMIT))
        document_ids = await self._doc_repo.list_pending_ids(workspace_id, limit)
        Log.info(f"Categorizing {len(document_ids)} pending documents in {workspace_id}")

        results: list[SweepItem] = []
        for document_id in document_ids:
            outcome = await self.run_categorization(document_id)
            results.append(SweepItem(id=document_id, ok=outcome.ok, error=outcome.error))
        return results

    async def _run(self, document_id: str) -> CategorizationOutcome:
        try:
            document = await self._doc_repo.find_with_category(document_id)
        except DocumentNotFoundError as exc:
            Log.error(str(exc))
            return CategorizationOutcome(ok=False, document_id=document_id, error=str(exc))
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            Log.exception(f"Could not load document {document_id}: {message}")
            return CategorizationOutcome(ok=False, document_id=document_id, error=message)

        try:
            await self._doc_repo.update(document_id, ai_status=AiStatus.CATEGORIZING)
            categories = await self._categories_repo.list_for_workspace(document.workspace_id)
            result = await self._categorizer.categorize(
                CategorizationInput(
                    filename=document.file_name or document.title or "Untitled",
                    note=document.title,
                    snippet=self.build_snippet(document),
                    existing_categories=[c.name for c in categories],
                )
            )
            resolved = resolve_category(
                CategoryLabelPolicy.WORKSPACE_DEDUP, result.category_name, categories
            )
            ai_meta = {
                "rationale": result.rationale,
                "reuseExisting": result.reuse_existing,
                "rawResponse": result.raw_response,
                "model": result.model,
            }
            await self._doc_repo.update(
                document_id,
                category_id=resolved.category_id,
                category_label=resolved.label,
                ai_status=AiStatus.READY,
                ai_confidence=result.confidence,
                ai_meta_json=ai_meta,
            )
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            Log.error(f"Categorization of document {document_id} failed: {message}")
            try:
                await self._doc_repo.update(
                    document_id, ai_status=AiStatus.FAILED, ai_meta_json={"error": message}
                )
            except Exception:
                Log.exception(f"Could not mark categorization of {document_id} as failed")
            return CategorizationOutcome(ok=False, document_id=document_id, error=message)

        category = next((c for c in categories if c.id == resolved.category_id), None)
        updated = replace(
            document,
            category_id=resolved.category_id,
            category_label=resolved.label,
            ai_status=AiStatus.READY,
            ai_confidence=result.confidence,
            ai_meta_json=ai_meta,
            category=category,
        )
        Log.info(f"Document {document_id} categorized as {resolved.label!r}")
        return CategorizationOutcome(ok=True, document_id=document_id, document=updated)

    def build_snippet(self, document: DocumentRecord) -> str | None:
        text = document.raw_text or _PAGE_SEPARATOR.join(document.ocr_pages)
        return text[: self._snippet_chars] or None


def build_categorization_runner(
    settings: Settings,
    *,
    client: BaseChatClient | None = None,
    locks: DocumentLocks | None = None,
) -> CategorizationRunner:
    client = client if client is not None else ChatClientFactory.create(settings)
    return CategorizationRunner(
        doc_repo=DocumentsRepository(),
        categories_repo=CategoriesRepository(),
        categorizer=Categorizer(client=client, model=settings.ai_categorization_model),
        locks=locks,
        snippet_chars=settings.categorization_snippet_chars,
        sweep_limit=settings.pending_sweep_limit,
    )
