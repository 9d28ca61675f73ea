import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from paperwork.processor.exceptions import DocumentBusyError


class DocumentLocks:
    """Advisory per-document lock: at most one run per document id."""

    def __init__(self) -> None:
        self._guard = asyncio.Lock()
        self._in_flight: set[str] = set()

    @asynccontextmanager
    async def hold(self, document_id: str) -> AsyncIterator[None]:
        """Hold the lock for *document_id* for the duration of the block.

        Raises:
            DocumentBusyError: if another run already holds it.
        """
        async with self._guard:
            if document_id in self._in_flight:
                raise DocumentBusyError(f"Document {document_id} is already being processed")
            self._in_flight.add(document_id)
        try:
            yield
        finally:
            async with self._guard:
                self._in_flight.discard(document_id)

    def is_held(self, document_id: str) -> bool:
        return document_id in self._in_flight
