from __future__ import annotations

import pytest

from app.db.repositories.document_repository import DocumentRepository
from app.db.storage import MemoryStorage
from app.domains.documents.entities import BlockType
from app.domains.documents.services import DocumentPersistenceError, DocumentService


@pytest.fixture
def service(repository: DocumentRepository) -> DocumentService:
    return DocumentService(repository)


async def test_create_document_is_persisted(service: DocumentService) -> None:
    document = await service.create_document()

    stored = await service.get_document(document.id)
    assert stored is not None
    assert stored.title == "Untitled Document"
    assert len(stored.content) == 2


async def test_create_from_template(service: DocumentService) -> None:
    document = await service.create_document(template_id="meeting-notes")

    assert document.title == "Meeting Notes"
    assert document.content[0].content == "Meeting Title"
    assert document.content[3].type is BlockType.NUMBERED_LIST

    with pytest.raises(ValueError):
        await service.create_document(template_id="missing")


async def test_block_operations_round_trip(service: DocumentService) -> None:
    document = await service.create_document(title="Plan")
    heading_id, paragraph_id = document.block_ids

    document = await service.add_block(document.id, "quote", "Cited", after_block_id=heading_id)
    quote_id = document.block_ids[1]
    assert document.block_ids == [heading_id, quote_id, paragraph_id]

    document = await service.edit_block(document.id, paragraph_id, {"content": "Body"})
    assert document.find_block(paragraph_id).content == "Body"

    document = await service.convert_block(document.id, quote_id, "code")
    assert document.find_block(quote_id).type is BlockType.CODE

    document = await service.move_block(document.id, quote_id, paragraph_id)
    assert document.block_ids == [heading_id, paragraph_id, quote_id]

    document = await service.duplicate_block(document.id, paragraph_id)
    assert len(document.content) == 4

    document = await service.remove_block(document.id, quote_id)
    assert quote_id not in document.block_ids

    document = await service.autoformat_block(document.id, paragraph_id, "- first")
    assert document.find_block(paragraph_id).type is BlockType.BULLET_LIST


async def test_operations_on_missing_document_return_none(service: DocumentService) -> None:
    assert await service.add_block("missing") is None
    assert await service.edit_block("missing", "b", {}) is None
    assert await service.get_document_stats("missing") is None
    assert await service.export_document("missing", "md") is None


async def test_search_is_case_insensitive_over_title_and_blocks(service: DocumentService) -> None:
    first = await service.create_document(title="Groceries")
    second = await service.create_document(title="Work")
    await service.edit_block(second.id, second.block_ids[1], {"content": "Buy MILK later"})

    results, _ = await service.search_documents("milk")
    assert [doc.id for doc in results] == [second.id]

    results, _ = await service.search_documents("GROC")
    assert [doc.id for doc in results] == [first.id]

    results, _ = await service.search_documents("")
    assert {doc.id for doc in results} == {first.id, second.id}


async def test_list_documents_sorting(service: DocumentService, fake_clock) -> None:
    b = await service.create_document(title="beta")
    a = await service.create_document(title="Alpha")
    await service.update_document(b.id, is_starred=True)

    assert [doc.id for doc in await service.list_documents("modified")] == [b.id, a.id]
    assert [doc.id for doc in await service.list_documents("created")] == [a.id, b.id]
    assert [doc.id for doc in await service.list_documents("title")] == [a.id, b.id]

    with pytest.raises(ValueError):
        await service.list_documents("size")


async def test_stats_and_export(service: DocumentService) -> None:
    document = await service.create_document(title="Report")
    await service.edit_block(document.id, document.block_ids[1], {"content": "one two three"})

    stats = await service.get_document_stats(document.id)
    assert stats["word_count"] == 4
    assert stats["block_count"] == 2

    exported = await service.export_document(document.id, "md")
    assert exported["filename"] == "Report.md"
    assert exported["content"] == "# Report\n\none two three"


async def test_failed_save_raises() -> None:
    service = DocumentService(DocumentRepository(MemoryStorage(available=False), "docs"))

    with pytest.raises(DocumentPersistenceError):
        await service.create_document()


async def test_seed_demo_documents_only_into_empty_store(service: DocumentService) -> None:
    assert await service.seed_demo_documents() == 4
    assert await service.seed_demo_documents() == 0

    guide = await service.get_document("1")
    assert guide.title == "Getting Started Guide"
    assert guide.is_starred is True
