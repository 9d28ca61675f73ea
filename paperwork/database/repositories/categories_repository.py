from psycopg.rows import dict_row

from paperwork.database.connection import get_connection
from paperwork.database.models import CategoryRecord


class CategoriesRepository:
    """Read-only access to workspace categories."""

    async def list_for_workspace(self, workspace_id: str) -> list[CategoryRecord]:
        """Return all categories of a workspace, ordered by name."""
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    """
                    SELECT id, workspace_id, name
                    FROM categories
                    WHERE workspace_id = %s
                    ORDER BY name
                    """,
                    (workspace_id,),
                )
                rows = await cur.fetchall()

        return [
            CategoryRecord(
                id=str(row["id"]),
                workspace_id=str(row["workspace_id"]),
                name=row["name"],
            )
            for row in rows
        ]
