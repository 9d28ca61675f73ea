from unittest.mock import AsyncMock, MagicMock

from paperwork.categorization.categorizer import Categorizer
from paperwork.categorization.exceptions import MalformedCategorizationError
from paperwork.categorization.models import CategorizationResult
from paperwork.database.models import AiStatus, CategoryRecord, DocumentRecord
from paperwork.database.repositories.categories_repository import CategoriesRepository
from paperwork.database.repositories.documents_repository import DocumentsRepository
from paperwork.processor.categorization_runner import CategorizationRunner
from paperwork.processor.exceptions import DocumentNotFoundError
from paperwork.processor.locks import DocumentLocks

BANKING = CategoryRecord(id="cat-1", workspace_id="ws-1", name="Banking")


def _make_document(**overrides: object) -> DocumentRecord:
    values: dict[str, object] = {
        "id": "doc-1",
        "workspace_id": "ws-1",
        "file_name": "statement.pdf",
        "title": "Bank statement",
        "raw_text": "Monthly statement for your current account",
    }
    values.update(overrides)
    return DocumentRecord(**values)  # type: ignore[arg-type]


def _result(name: str = "  BANKING  ", confidence: float = 0.8) -> CategorizationResult:
    return CategorizationResult(
        category_name=name,
        confidence=confidence,
        raw_response='{"categoryName": "BANKING"}',
        model="gpt-4.1-mini",
        rationale="Bank statement",
        reuse_existing=True,
    )


def _make_runner(
    document: DocumentRecord | None = None,
    locks: DocumentLocks | None = None,
) -> tuple[CategorizationRunner, MagicMock, MagicMock, MagicMock]:
    doc_repo = MagicMock(spec=DocumentsRepository)
    categories_repo = MagicMock(spec=CategoriesRepository)
    categorizer = MagicMock(spec=Categorizer)
    doc_repo.find_with_category = AsyncMock(return_value=document or _make_document())
    doc_repo.update = AsyncMock()
    doc_repo.list_pending_ids = AsyncMock(return_value=[])
    categories_repo.list_for_workspace = AsyncMock(return_value=[BANKING])
    categorizer.categorize = AsyncMock(return_value=_result())
    runner = CategorizationRunner(
        doc_repo=doc_repo,
        categories_repo=categories_repo,
        categorizer=categorizer,
        locks=locks,
    )
    return runner, doc_repo, categories_repo, categorizer


class TestRunCategorization:
    async def test_links_existing_category(self) -> None:
        runner, doc_repo, _cats, _categorizer = _make_runner()

        outcome = await runner.run_categorization("doc-1")

        assert outcome.ok is True
        assert outcome.document is not None
        assert outcome.document.category_id == "cat-1"
        assert outcome.document.category_label == "Banking"
        assert outcome.document.category == BANKING
        assert outcome.document.ai_status == AiStatus.READY
        doc_repo.update.assert_any_await("doc-1", ai_status=AiStatus.CATEGORIZING)
        final = doc_repo.update.call_args_list[-1].kwargs
        assert final["category_id"] == "cat-1"
        assert final["category_label"] == "Banking"
        assert final["ai_status"] == AiStatus.READY
        assert final["ai_confidence"] == 0.8
        assert final["ai_meta_json"] == {
            "rationale": "Bank statement",
            "reuseExisting": True,
            "rawResponse": '{"categoryName": "BANKING"}',
            "model": "gpt-4.1-mini",
        }

    async def test_marks_categorizing_before_calling_provider(self) -> None:
        runner, doc_repo, _cats, categorizer = _make_runner()
        call_order: list[str] = []
        doc_repo.update.side_effect = lambda *a, **k: call_order.append(
            f"update:{k.get('ai_status')}"
        )
        categorizer.categorize.side_effect = lambda *a: call_order.append("categorize") or _result()

        await runner.run_categorization("doc-1")

        assert call_order == [
            f"update:{AiStatus.CATEGORIZING}",
            "categorize",
            f"update:{AiStatus.READY}",
        ]

    async def test_new_name_clears_category_id(self) -> None:
        runner, doc_repo, _cats, categorizer = _make_runner()
        categorizer.categorize.return_value = _result(name="travel plans")

        outcome = await runner.run_categorization("doc-1")

        assert outcome.ok is True
        final = doc_repo.update.call_args_list[-1].kwargs
        assert final["category_label"] == "Travel Plans"
        assert final["category_id"] is None

    async def test_builds_input_from_document(self) -> None:
        runner, _doc_repo, _cats, categorizer = _make_runner()
        await runner.run_categorization("doc-1")

        data = categorizer.categorize.call_args.args[0]
        assert data.filename == "statement.pdf"
        assert data.note == "Bank statement"
        assert data.snippet == "Monthly statement for your current account"
        assert data.existing_categories == ["Banking"]

    async def test_snippet_falls_back_to_ocr_pages(self) -> None:
        document = _make_document(raw_text=None, ocr_pages=["a" * 400, "b" * 400])
        runner, _doc_repo, _cats, categorizer = _make_runner(document)
        await runner.run_categorization("doc-1")

        snippet = categorizer.categorize.call_args.args[0].snippet
        assert len(snippet) == 500
        assert snippet.startswith("a" * 400 + "\n\n")

    async def test_filename_falls_back_to_title_then_untitled(self) -> None:
        runner, _doc_repo, _cats, categorizer = _make_runner(
            _make_document(file_name=None, title=None, raw_text=None)
        )
        await runner.run_categorization("doc-1")

        data = categorizer.categorize.call_args.args[0]
        assert data.filename == "Untitled"
        assert data.snippet is None

    async def test_missing_document_writes_nothing(self) -> None:
        runner, doc_repo, _cats, categorizer = _make_runner()
        doc_repo.find_with_category.side_effect = DocumentNotFoundError("Document x not found")

        outcome = await runner.run_categorization("x")

        assert outcome.ok is False
        assert outcome.error == "Document x not found"
        doc_repo.update.assert_not_awaited()
        categorizer.categorize.assert_not_awaited()

    async def test_load_failure_is_returned_not_raised(self) -> None:
        runner, doc_repo, _cats, categorizer = _make_runner()
        doc_repo.find_with_category.side_effect = OSError("connection refused")

        outcome = await runner.run_categorization("doc-1")

        assert outcome.ok is False
        assert outcome.error == "connection refused"
        doc_repo.update.assert_not_awaited()
        categorizer.categorize.assert_not_awaited()

    async def test_failure_is_persisted(self) -> None:
        runner, doc_repo, _cats, categorizer = _make_runner()
        categorizer.categorize.side_effect = MalformedCategorizationError("bad json")

        outcome = await runner.run_categorization("doc-1")

        assert outcome.ok is False
        assert outcome.error == "bad json"
        doc_repo.update.assert_awaited_with(
            "doc-1", ai_status=AiStatus.FAILED, ai_meta_json={"error": "bad json"}
        )

    async def test_busy_document_is_rejected(self) -> None:
        locks = DocumentLocks()
        runner, doc_repo, _cats, _categorizer = _make_runner(locks=locks)

        async with locks.hold("doc-1"):
            outcome = await runner.run_categorization("doc-1")

        assert outcome.ok is False
        assert outcome.error == "Document doc-1 is already being processed"
        doc_repo.find_with_category.assert_not_awaited()


class TestCategorizePending:
    async def test_runs_each_pending_document(self) -> None:
        runner, doc_repo, _cats, categorizer = _make_runner()
        doc_repo.list_pending_ids.return_value = ["doc-1", "doc-2", "doc-3"]
        categorizer.categorize.side_effect = [
            _result(),
            MalformedCategorizationError("bad json"),
            _result(),
        ]

        items = await runner.categorize_pending("ws-1")

        assert [(i.id, i.ok, i.error) for i in items] == [
            ("doc-1", True, None),
            ("doc-2", False, "bad json"),
            ("doc-3", True, None),
        ]
        doc_repo.list_pending_ids.assert_awaited_once_with("ws-1", 10)

    async def test_load_failure_does_not_stop_the_sweep(self) -> None:
        runner, doc_repo, _cats, _categorizer = _make_runner()
        doc_repo.list_pending_ids.return_value = ["doc-1", "doc-2"]
        doc_repo.find_with_category.side_effect = [
            OSError("connection refused"),
            _make_document(id="doc-2"),
        ]

        items = await runner.categorize_pending("ws-1")

        assert [(i.id, i.ok, i.error) for i in items] == [
            ("doc-1", False, "connection refused"),
            ("doc-2", True, None),
        ]

    async def test_limit_is_clamped(self) -> None:
        runner, doc_repo, _cats, _categorizer = _make_runner()

        await runner.categorize_pending("ws-1", limit=500)
        await runner.categorize_pending("ws-1", limit=0)

        limits = [c.args[1] for c in doc_repo.list_pending_ids.call_args_list]
        assert limits == [50, 1]

    async def test_empty_workspace_returns_empty_list(self) -> None:
        runner, _doc_repo, _cats, _categorizer = _make_runner()
        assert await runner.categorize_pending("ws-1", limit=5) == []
