from psycopg.rows import dict_row

from paperwork.database.connection import get_connection
from paperwork.database.models import ExtractedFieldRecord


class ExtractedFieldsRepository:
    """Database operations for the extracted_fields table."""

    async def replace_for_document(
        self,
        document_id: str,
        fields: list[ExtractedFieldRecord],
    ) -> None:
        """Replace every extracted field of a document in one transaction.

        Existing rows are deleted first, then the new set is inserted, so a
        re-run never appends to an earlier run's fields.
        """
        async with get_connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(
                        "DELETE FROM extracted_fields WHERE document_id = %s",
                        (document_id,),
                    )
                    if fields:
                        await cur.executemany(
                            """
                            INSERT INTO extracted_fields (
                                document_id, key, value_text, value_number,
                                value_date, confidence, source_snippet, source_page
                            )
                            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                            """,
                            [
                                (
                                    document_id,
                                    f.key,
                                    f.value_text,
                                    f.value_number,
                                    f.value_date,
                                    f.confidence,
                                    f.source_snippet,
                                    f.source_page,
                                )
                                for f in fields
                            ],
                        )

    async def list_for_document(self, document_id: str) -> list[ExtractedFieldRecord]:
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    """
                    SELECT document_id, key, value_text, value_number,
                           value_date, confidence, source_snippet, source_page
                    FROM extracted_fields
                    WHERE document_id = %s
                    ORDER BY id
                    """,
                    (document_id,),
                )
                rows = await cur.fetchall()

        return [
            ExtractedFieldRecord(
                document_id=str(row["document_id"]),
                key=row["key"],
                value_text=row["value_text"],
                value_number=row["value_number"],
                value_date=row["value_date"],
                confidence=row["confidence"],
                source_snippet=row["source_snippet"],
                source_page=row["source_page"],
            )
            for row in rows
        ]
