from datetime import datetime, timezone
from typing import Iterable, List, Optional

from app.domains.documents.entities import Document

SORT_KEYS = ("modified", "created", "title")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _timestamp(value: Optional[datetime]) -> datetime:
    if value is None:
        return _EPOCH
    # Наивные метки времени считаются UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def matches_query(document: Document, query: str) -> bool:
    """Поиск подстроки без учета регистра в заголовке и блоках"""
    needle = query.lower()

    if needle in document.title.lower():
        return True

    return any(needle in block.content.lower() for block in document.content)


def filter_documents(documents: Iterable[Document], query: str) -> List[Document]:
    """Фильтрация документов с сохранением исходного порядка"""
    return [doc for doc in documents if matches_query(doc, query)]


def sort_by_modified(documents: Iterable[Document]) -> List[Document]:
    """Сначала последние измененные; документы без даты в конце"""
    return sorted(documents, key=lambda doc: _timestamp(doc.updated_at), reverse=True)


def sort_documents(documents: Iterable[Document], sort_by: str = "modified") -> List[Document]:
    """Сортировка списка документов: modified, created или title"""
    if sort_by == "modified":
        return sort_by_modified(documents)
    elif sort_by == "created":
        return sorted(documents, key=lambda doc: _timestamp(doc.created_at), reverse=True)
    elif sort_by == "title":
        return sorted(documents, key=lambda doc: doc.title.lower())
    raise ValueError(f"Unknown sort key: {sort_by}")
