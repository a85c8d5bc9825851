from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_document_repository
from app.core import clock
from app.db.repositories.document_repository import DocumentRepository
from app.db.storage import MemoryStorage
from app.main import app


class FakeClock:
    """Clock that moves one second forward on every reading."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def fake_clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
    monkeypatch.setattr(clock, "utcnow", fake)
    return fake


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def repository(storage: MemoryStorage) -> DocumentRepository:
    return DocumentRepository(storage, "test_documents")


@pytest.fixture
def client(repository: DocumentRepository) -> Iterator[TestClient]:
    """API client backed by an in-memory store (startup hooks are not run)."""

    app.dependency_overrides[get_document_repository] = lambda: repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_document_repository, None)
