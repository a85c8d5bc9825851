import json
import logging
from dataclasses import replace
from typing import Dict, List, Optional

from pydantic import ValidationError

from app.core import clock
from app.core.config import settings
from app.db.storage import KeyValueStorage, StorageError
from app.domains.documents.entities import Document
from app.domains.documents.schemas import DocumentSchema
from app.domains.documents.search import sort_by_modified

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Хранилище документов.

    Все документы лежат одним JSON-объектом {id: документ} под ключом
    ``storage_key``. Каждое чтение заново разбирает объект, каждая запись
    перезаписывает его целиком. Ошибки хранилища не выходят наружу:
    методы возвращают None, пустой список или False.
    """

    def __init__(self, storage: KeyValueStorage, storage_key: Optional[str] = None):
        self.storage = storage
        self.storage_key = storage_key or settings.storage_key

    async def _load(self) -> Dict[str, dict]:
        """Чтение и разбор всего набора документов"""
        raw = await self.storage.get_item(self.storage_key)
        if not raw:
            return {}

        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object under {self.storage_key!r}")
        return data

    async def _dump(self, documents: Dict[str, dict]) -> None:
        await self.storage.set_item(self.storage_key, json.dumps(documents))

    def _to_domain(self, document_id: str, data: dict) -> Optional[Document]:
        """Преобразование записи хранилища в доменную сущность"""
        try:
            return DocumentSchema.model_validate({**data, "id": document_id}).to_entity()
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Skipping unreadable document {document_id}: {e}")
            return None

    async def get(self, document_id: str) -> Optional[Document]:
        """Получение документа по id"""
        try:
            documents = await self._load()
        except (StorageError, ValueError) as e:
            logger.error(f"Error getting document {document_id}: {e}")
            return None

        data = documents.get(document_id)
        if not isinstance(data, dict):
            return None
        return self._to_domain(document_id, data)

    async def save(self, document_id: str, document: Document) -> bool:
        """Сохранение документа; updated_at всегда выставляется в момент записи"""
        now = clock.utcnow()
        stored = replace(
            document,
            id=document_id,
            created_at=document.created_at or now,
            updated_at=now,
        )

        try:
            documents = await self._load()
            documents[document_id] = DocumentSchema.from_entity(stored).to_storage()
            await self._dump(documents)
        except (StorageError, ValueError) as e:
            logger.error(f"Error saving document {document_id}: {e}")
            return False

        logger.info(f"Document {document_id} saved ({len(stored.content)} blocks)")
        return True

    async def get_all(self) -> List[Document]:
        """Все документы, сначала последние измененные"""
        try:
            documents = await self._load()
        except (StorageError, ValueError) as e:
            logger.error(f"Error getting all documents: {e}")
            return []

        result = []
        for document_id, data in documents.items():
            if not isinstance(data, dict):
                logger.warning(f"Skipping malformed entry {document_id}")
                continue
            document = self._to_domain(document_id, data)
            if document is not None:
                result.append(document)

        return sort_by_modified(result)

    async def delete(self, document_id: str) -> bool:
        """Удаление документа; отсутствующий id не считается ошибкой"""
        try:
            documents = await self._load()
            documents.pop(document_id, None)
            await self._dump(documents)
        except (StorageError, ValueError) as e:
            logger.error(f"Error deleting document {document_id}: {e}")
            return False

        logger.info(f"Document {document_id} deleted")
        return True
