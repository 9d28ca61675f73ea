import asyncio
from collections import deque

from paperwork.logging.logger import Log
from paperwork.processor.categorization_runner import CategorizationRunner
from paperwork.processor.processor import DocumentProcessor


class BackgroundQueue:
    """Fire-and-forget scheduling of processing and categorization runs.

    Categorization ids go through a FIFO drained by a single task, so at
    most one categorization runs at a time. Processing runs are scheduled
    as independent tasks with no ordering between them. Enqueueing outside
    a running event loop is logged and the id is dropped.
    """

    def __init__(self, processor: DocumentProcessor, runner: CategorizationRunner) -> None:
        self._processor = processor
        self._runner = runner
        self._categorization_ids: deque[str] = deque()
        self._drain_task: asyncio.Task[None] | None = None
        self._processing_tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._categorization_ids)

    def enqueue_categorization(self, document_id: str) -> None:
        if not self._has_running_loop(document_id, "categorization"):
            return
        self._categorization_ids.append(document_id)
        Log.debug(f"Queued categorization of {document_id} ({self.pending} pending)")
        if self._drain_task is None or self._drain_task.done():
            self._drain_task = asyncio.create_task(self._drain())

    def enqueue_document_processing(self, document_id: str) -> None:
        if not self._has_running_loop(document_id, "processing"):
            return
        task = asyncio.create_task(self._process(document_id))
        self._processing_tasks.add(task)
        task.add_done_callback(self._processing_tasks.discard)

    async def join(self) -> None:
        """Wait until queued categorizations and scheduled processing finish."""
        while True:
            tasks = list(self._processing_tasks)
            if self._drain_task is not None and not self._drain_task.done():
                tasks.append(self._drain_task)
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _drain(self) -> None:
        while self._categorization_ids:
            document_id = self._categorization_ids.popleft()
            try:
                outcome = await self._runner.run_categorization(document_id)
            except Exception:
                Log.exception(f"Queued categorization of {document_id} crashed")
                continue
            if not outcome.ok:
                Log.error(f"Queued categorization of {document_id} failed: {outcome.error}")

    async def _process(self, document_id: str) -> None:
        try:
            result = await self._processor.process_document(document_id)
        except Exception:
            Log.exception(f"Scheduled processing of {document_id} crashed")
            return
        if not result.ok:
            Log.error(f"Scheduled processing of {document_id} failed: {result.error}")

    @staticmethod
    def _has_running_loop(document_id: str, kind: str) -> bool:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            Log.error(f"Dropped {kind} of {document_id}: no running event loop")
            return False
        return True
