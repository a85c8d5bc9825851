from fastapi import Depends

from app.core.config import settings
from app.core.db import SessionLocal
from app.db.repositories.document_repository import DocumentRepository
from app.db.storage import SqlStorage
from app.domains.assistant.services import AssistantService
from app.domains.documents.services import DocumentService

_assistant_service = AssistantService()


def get_document_repository() -> DocumentRepository:
    """Хранилище документов поверх таблицы storage_entries"""
    return DocumentRepository(SqlStorage(SessionLocal), settings.storage_key)


def get_document_service(
    repository: DocumentRepository = Depends(get_document_repository)
) -> DocumentService:
    return DocumentService(repository)


def get_assistant_service() -> AssistantService:
    return _assistant_service
