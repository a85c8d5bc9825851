from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.base import Base
from app.db.models import StorageEntry  # noqa: F401
from app.db.repositories.document_repository import DocumentRepository
from app.db.storage import SqlStorage, StorageError
from app.domains.documents.entities import Document


@pytest.fixture
async def session_factory(tmp_path: Path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


async def test_get_and_set_item(session_factory) -> None:
    storage = SqlStorage(session_factory)

    assert await storage.get_item("k") is None
    await storage.set_item("k", "one")
    await storage.set_item("k", "two")
    assert await storage.get_item("k") == "two"


async def test_repository_over_sql_storage(session_factory) -> None:
    repository = DocumentRepository(SqlStorage(session_factory), "docs")
    document = Document.create_document(title="Persisted")

    assert await repository.save(document.id, document) is True

    loaded = await repository.get(document.id)
    assert loaded.title == "Persisted"
    assert loaded.content == document.content


async def test_missing_table_raises_storage_error(tmp_path: Path) -> None:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    storage = SqlStorage(async_sessionmaker(bind=engine, class_=AsyncSession))
    try:
        with pytest.raises(StorageError):
            await storage.get_item("k")
        assert await DocumentRepository(storage, "docs").get_all() == []
    finally:
        await engine.dispose()
