import os
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest

from paperwork.config.settings import Settings
from paperwork.database.connection import close_pool, get_connection, init_pool

SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id TEXT PRIMARY KEY,
    workspace_id TEXT NOT NULL,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    workspace_id TEXT NOT NULL,
    file_name TEXT,
    title TEXT,
    mime_type TEXT,
    storage_key TEXT,
    status TEXT NOT NULL DEFAULT 'UPLOADED',
    ai_status TEXT NOT NULL DEFAULT 'PENDING',
    category_id TEXT REFERENCES categories(id),
    category_label TEXT,
    raw_text TEXT,
    ocr_pages JSONB,
    extract_data JSONB,
    sensitive_detected BOOLEAN NOT NULL DEFAULT FALSE,
    processing_error TEXT,
    processed_at TIMESTAMPTZ,
    ai_confidence DOUBLE PRECISION,
    ai_meta_json JSONB,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE TABLE IF NOT EXISTS extracted_fields (
    id BIGSERIAL PRIMARY KEY,
    document_id TEXT NOT NULL REFERENCES documents(id) ON DELETE CASCADE,
    key TEXT NOT NULL,
    value_text TEXT,
    value_number DOUBLE PRECISION,
    value_date DATE,
    confidence DOUBLE PRECISION,
    source_snippet TEXT,
    source_page INTEGER
);
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "paperwork_test")
    return Settings()


@pytest.fixture()
async def integration_pool() -> AsyncGenerator[None, None]:
    try:
        await init_pool(_test_settings())
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}")
    async with get_connection() as conn:
        await conn.execute(SCHEMA)
        await conn.commit()
    try:
        yield
    finally:
        await close_pool()


@pytest.fixture()
async def workspace_id(integration_pool: None) -> AsyncGenerator[str, None]:
    """A fresh workspace whose rows are deleted after the test."""
    workspace = f"ws-{uuid.uuid4()}"
    yield workspace
    async with get_connection() as conn:
        await conn.execute("DELETE FROM documents WHERE workspace_id = %s", (workspace,))
        await conn.execute("DELETE FROM categories WHERE workspace_id = %s", (workspace,))
        await conn.commit()


async def _insert_document(workspace_id: str, **values: object) -> str:
    document_id = str(values.pop("id", uuid.uuid4()))
    columns = ["id", "workspace_id", *values]
    placeholders = ", ".join(["%s"] * len(columns))
    async with get_connection() as conn:
        await conn.execute(
            f"INSERT INTO documents ({', '.join(columns)}) VALUES ({placeholders})",
            (document_id, workspace_id, *values.values()),
        )
        await conn.commit()
    return document_id


async def _insert_category(workspace_id: str, name: str) -> str:
    category_id = str(uuid.uuid4())
    async with get_connection() as conn:
        await conn.execute(
            "INSERT INTO categories (id, workspace_id, name) VALUES (%s, %s, %s)",
            (category_id, workspace_id, name),
        )
        await conn.commit()
    return category_id


@pytest.fixture()
def insert_document() -> Callable[..., Awaitable[str]]:
    return _insert_document


@pytest.fixture()
def insert_category() -> Callable[[str, str], Awaitable[str]]:
    return _insert_category
