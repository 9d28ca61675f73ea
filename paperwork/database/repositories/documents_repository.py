from enum import Enum
from typing import Any, ClassVar

from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from paperwork.database.connection import get_connection
from paperwork.database.models import (
    AiStatus,
    CategoryRecord,
    DocumentRecord,
    DocumentStatus,
)
from paperwork.processor.exceptions import DocumentNotFoundError

_DOCUMENT_COLUMNS = """
    d.id, d.workspace_id, d.file_name, d.title, d.mime_type, d.storage_key,
    d.status, d.ai_status, d.category_id, d.category_label, d.raw_text,
    d.ocr_pages, d.extract_data, d.sensitive_detected, d.processing_error,
    d.processed_at, d.ai_confidence, d.ai_meta_json, d.created_at, d.updated_at
"""


class DocumentsRepository:
    """Database operations for the documents table."""

    UPDATABLE_COLUMNS: ClassVar[frozenset[str]] = frozenset({
        "title",
        "status",
        "ai_status",
        "category_id",
        "category_label",
        "raw_text",
        "ocr_pages",
        "extract_data",
        "sensitive_detected",
        "processing_error",
        "processed_at",
        "ai_confidence",
        "ai_meta_json",
    })
    JSON_COLUMNS: ClassVar[frozenset[str]] = frozenset({
        "ocr_pages",
        "extract_data",
        "ai_meta_json",
    })

    async def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"SELECT {_DOCUMENT_COLUMNS} FROM documents d WHERE d.id = %s",
                    (document_id,),
                )
                row = await cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _row_to_document(row)

    async def find_with_category(self, document_id: str) -> DocumentRecord:
        """Find a document by ID together with its current category.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    f"""
                    SELECT {_DOCUMENT_COLUMNS},
                           c.name AS joined_category_name
                    FROM documents d
                    LEFT JOIN categories c ON c.id = d.category_id
                    WHERE d.id = %s
                    """,
                    (document_id,),
                )
                row = await cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        document = _row_to_document(row)
        if row.get("category_id") is not None and row.get("joined_category_name") is not None:
            document.category = CategoryRecord(
                id=str(row["category_id"]),
                workspace_id=str(row["workspace_id"]),
                name=row["joined_category_name"],
            )
        return document

    async def update(self, document_id: str, **values: Any) -> None:
        """Update the given columns of one document.

        Raises:
            ValueError: if a column is not updatable.
            DocumentNotFoundError: if no document with this ID exists.
        """
        if not values:
            return
        unknown = set(values) - self.UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update document columns: {sorted(unknown)}")

        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in values
        )
        query = sql.SQL(
            "UPDATE documents SET {}, updated_at = NOW() WHERE id = %s"
        ).format(assignments)
        params = [self._to_db_value(column, value) for column, value in values.items()]
        params.append(document_id)

        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            await conn.commit()

    async def list_pending_ids(self, workspace_id: str, limit: int) -> list[str]:
        """Return IDs of documents awaiting categorization, oldest first."""
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT id
                    FROM documents
                    WHERE workspace_id = %s
                      AND ai_status = %s
                    ORDER BY created_at
                    LIMIT %s
                    """,
                    (workspace_id, AiStatus.PENDING.value, limit),
                )
                rows = await cur.fetchall()
        return [str(row[0]) for row in rows]

    def _to_db_value(self, column: str, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if column in self.JSON_COLUMNS and value is not None:
            return Jsonb(value)
        return value


def _row_to_document(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=str(row["id"]),
        workspace_id=str(row["workspace_id"]),
        file_name=row["file_name"],
        title=row["title"],
        mime_type=row["mime_type"],
        storage_key=row["storage_key"],
        status=DocumentStatus(row["status"]),
        ai_status=AiStatus(row["ai_status"]),
        category_id=str(row["category_id"]) if row["category_id"] is not None else None,
        category_label=row["category_label"],
        raw_text=row["raw_text"],
        ocr_pages=list(row["ocr_pages"] or []),
        extract_data=row["extract_data"],
        sensitive_detected=bool(row["sensitive_detected"]),
        processing_error=row["processing_error"],
        processed_at=row["processed_at"],
        ai_confidence=row["ai_confidence"],
        ai_meta_json=row["ai_meta_json"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
