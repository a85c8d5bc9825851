import logging
import time
import uuid
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from app.core import clock
from app.domains.documents import mutations
from app.domains.documents.entities import DEFAULT_TITLE, Document, create_block
from app.domains.documents.markdown import render_export
from app.domains.documents.schemas import BlockSchema
from app.domains.documents.search import filter_documents, sort_documents
from app.domains.documents.templates import TEMPLATES, demo_documents

if TYPE_CHECKING:
    from app.db.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentPersistenceError(RuntimeError):
    """Документ не удалось записать в хранилище"""


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(self, repository: "DocumentRepository"):
        self.repository = repository

    async def _save(self, document: Document) -> Document:
        if not await self.repository.save(document.id, document):
            raise DocumentPersistenceError(f"Failed to save document {document.id}")

        saved = await self.repository.get(document.id)
        if saved is None:
            raise DocumentPersistenceError(f"Document {document.id} is not readable after save")
        return saved

    async def _apply(self, document_id: str, mutation: Callable[[Document], Document]) -> Optional[Document]:
        """Загрузка документа, применение операции и сохранение"""
        document = await self.repository.get(document_id)
        if document is None:
            return None
        return await self._save(mutation(document))

    async def create_document(self, title: Optional[str] = None, template_id: Optional[str] = None) -> Document:
        """Создание нового документа, пустого или по шаблону"""
        if template_id is not None:
            template = TEMPLATES.get(template_id)
            if template is None:
                raise ValueError(f"Unknown template: {template_id}")
            now = clock.utcnow()
            document = Document(
                id=uuid.uuid4().hex,
                title=title or template.name,
                content=template.build_blocks(),
                created_at=now,
                updated_at=now,
            )
        else:
            document = Document.create_document(title=title or DEFAULT_TITLE)

        logger.info(f"Creating document {document.id} (template={template_id})")
        return await self._save(document)

    async def get_document(self, document_id: str) -> Optional[Document]:
        """Получение документа по id"""
        return await self.repository.get(document_id)

    async def list_documents(self, sort_by: str = "modified") -> List[Document]:
        """Список документов в заданном порядке"""
        return sort_documents(await self.repository.get_all(), sort_by)

    async def search_documents(self, query: str) -> Tuple[List[Document], int]:
        """Поиск документов; возвращает результаты и время поиска в мс"""
        start_time = time.time()

        documents = filter_documents(await self.repository.get_all(), query)

        search_time = int((time.time() - start_time) * 1000)
        return documents, search_time

    async def update_document(
        self,
        document_id: str,
        title: Optional[str] = None,
        content: Optional[List[BlockSchema]] = None,
        is_starred: Optional[bool] = None,
    ) -> Optional[Document]:
        """Обновление заголовка, содержимого или отметки документа"""
        def mutation(document: Document) -> Document:
            changes: Dict[str, Any] = {}
            if title:
                changes["title"] = title
            if content is not None:
                changes["content"] = [block.to_entity() for block in content]
            if is_starred is not None:
                changes["is_starred"] = is_starred
            return document.with_changes(**changes)

        return await self._apply(document_id, mutation)

    async def delete_document(self, document_id: str) -> bool:
        """Удаление документа"""
        if not await self.repository.delete(document_id):
            raise DocumentPersistenceError(f"Failed to delete document {document_id}")
        return True

    async def add_block(
        self,
        document_id: str,
        block_type: str = "paragraph",
        content: str = "",
        level: Optional[int] = None,
        after_block_id: Optional[str] = None,
    ) -> Optional[Document]:
        """Добавление нового блока после after_block_id"""
        block = create_block(block_type, content, level)
        return await self._apply(
            document_id, lambda doc: mutations.insert_block(doc, after_block_id, block)
        )

    async def edit_block(self, document_id: str, block_id: str, patch: Dict[str, Any]) -> Optional[Document]:
        return await self._apply(document_id, lambda doc: mutations.update_block(doc, block_id, patch))

    async def remove_block(self, document_id: str, block_id: str) -> Optional[Document]:
        return await self._apply(document_id, lambda doc: mutations.delete_block(doc, block_id))

    async def duplicate_block(self, document_id: str, block_id: str) -> Optional[Document]:
        return await self._apply(document_id, lambda doc: mutations.duplicate_block(doc, block_id))

    async def convert_block(self, document_id: str, block_id: str, action: str) -> Optional[Document]:
        if action not in mutations.CONVERT_ACTIONS:
            raise ValueError(f"Unknown block action: {action}")
        return await self._apply(document_id, lambda doc: mutations.convert_block(doc, block_id, action))

    async def move_block(
        self, document_id: str, block_id: str, after_block_id: Optional[str]
    ) -> Optional[Document]:
        return await self._apply(
            document_id, lambda doc: mutations.move_block(doc, block_id, after_block_id)
        )

    async def autoformat_block(self, document_id: str, block_id: str, text: str) -> Optional[Document]:
        return await self._apply(document_id, lambda doc: mutations.autoformat_block(doc, block_id, text))

    async def get_document_stats(self, document_id: str) -> Optional[dict]:
        """Получение статистики документа"""
        document = await self.repository.get(document_id)

        if not document:
            return None

        return {
            "document_id": document.id,
            "title": document.title,
            "word_count": document.get_word_count(),
            "character_count": document.get_content_length(),
            "block_count": len(document.content),
            "last_modified": document.updated_at,
            "created_at": document.created_at
        }

    async def export_document(self, document_id: str, format_type: str) -> Optional[dict]:
        """Экспорт документа в md, txt или html"""
        document = await self.repository.get(document_id)

        if not document:
            return None

        return {
            "document_id": document.id,
            "format": format_type,
            "filename": f"{document.title}.{format_type}",
            "content": render_export(document, format_type),
            "exported_at": clock.utcnow()
        }

    async def seed_demo_documents(self) -> int:
        """Заполнение пустого хранилища демонстрационными документами"""
        if await self.repository.get_all():
            return 0

        count = 0
        for document in demo_documents():
            if await self.repository.save(document.id, document):
                count += 1

        logger.info(f"Seeded {count} demo documents")
        return count
