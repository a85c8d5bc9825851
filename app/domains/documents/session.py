import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from app.core import clock
from app.core.config import settings
from app.core.debounce import Debouncer
from app.domains.documents import mutations
from app.domains.documents.entities import Document, create_block

if TYPE_CHECKING:
    from app.db.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


class EditorSession:
    """Открытый в редакторе документ с отложенным автосохранением.

    Каждая правка заменяет текущую версию документа и перезапускает таймер
    автосохранения, поэтому серия быстрых правок записывается один раз.
    """

    def __init__(
        self,
        repository: "DocumentRepository",
        document: Document,
        autosave_delay: Optional[float] = None,
    ):
        self.repository = repository
        self.document = document
        self.last_saved_at: Optional[datetime] = None
        self.last_save_ok: Optional[bool] = None
        delay = settings.autosave_delay if autosave_delay is None else autosave_delay
        self._autosave = Debouncer(delay, self.save)

    @classmethod
    async def open(
        cls,
        repository: "DocumentRepository",
        document_id: str,
        autosave_delay: Optional[float] = None,
    ) -> "EditorSession":
        """Открытие документа; при отсутствии - пустой документ-заготовка"""
        document = await repository.get(document_id)
        if document is None:
            logger.info(f"Document {document_id} not found, opening an empty placeholder")
            document = Document.create_document(id=document_id)
        return cls(repository, document, autosave_delay)

    @property
    def has_pending_save(self) -> bool:
        return self._autosave.pending

    def apply(self, mutation: Callable[[Document], Document]) -> Document:
        """Применение операции к документу и планирование автосохранения"""
        self.document = mutation(self.document)
        self._autosave.schedule()
        return self.document

    def insert_block(
        self,
        block_type: str = "paragraph",
        content: str = "",
        level: Optional[int] = None,
        after_block_id: Optional[str] = None,
    ) -> Document:
        block = create_block(block_type, content, level)
        return self.apply(lambda doc: mutations.insert_block(doc, after_block_id, block))

    def update_block(self, block_id: str, patch: Dict[str, Any]) -> Document:
        return self.apply(lambda doc: mutations.update_block(doc, block_id, patch))

    def delete_block(self, block_id: str) -> Document:
        return self.apply(lambda doc: mutations.delete_block(doc, block_id))

    def duplicate_block(self, block_id: str) -> Document:
        return self.apply(lambda doc: mutations.duplicate_block(doc, block_id))

    def convert_block(self, block_id: str, action: str) -> Document:
        return self.apply(lambda doc: mutations.convert_block(doc, block_id, action))

    def move_block(self, block_id: str, after_block_id: Optional[str]) -> Document:
        return self.apply(lambda doc: mutations.move_block(doc, block_id, after_block_id))

    def autoformat_block(self, block_id: str, text: str) -> Document:
        return self.apply(lambda doc: mutations.autoformat_block(doc, block_id, text))

    def rename(self, title: str) -> Document:
        return self.apply(lambda doc: mutations.rename_document(doc, title))

    async def save(self) -> bool:
        """Немедленное сохранение текущей версии"""
        self._autosave.cancel()
        ok = await self.repository.save(self.document.id, self.document)
        self.last_save_ok = ok
        if ok:
            self.last_saved_at = clock.utcnow()
        else:
            logger.error(f"Autosave failed for document {self.document.id}")
        return ok

    async def close(self) -> None:
        """Запись отложенных правок перед закрытием"""
        await self._autosave.flush()
