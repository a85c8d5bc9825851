from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db.models.storage import StorageEntry


class StorageError(Exception):
    """Ошибка доступа к хранилищу: недоступно, переполнено и т.п."""


class KeyValueStorage(ABC):
    """Строковое key-value хранилище"""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Получение значения по ключу, None если ключа нет"""

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Запись значения по ключу"""


class MemoryStorage(KeyValueStorage):
    """Хранилище в памяти процесса.

    ``quota`` ограничивает суммарный размер значений в символах, как квота
    браузерного хранилища. ``available=False`` имитирует недоступное
    хранилище.
    """

    def __init__(self, quota: Optional[int] = None, available: bool = True):
        self.quota = quota
        self.available = available
        self._items: Dict[str, str] = {}

    def _check_available(self) -> None:
        if not self.available:
            raise StorageError("Storage is not available")

    async def get_item(self, key: str) -> Optional[str]:
        self._check_available()
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._check_available()

        if self.quota is not None:
            used = sum(len(v) for k, v in self._items.items() if k != key)
            if used + len(value) > self.quota:
                raise StorageError(f"Quota exceeded while writing {key!r}")

        self._items[key] = value


class SqlStorage(KeyValueStorage):
    """Хранилище в таблице storage_entries через асинхронную сессию SQLAlchemy"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(StorageEntry.value).where(StorageEntry.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e

    async def set_item(self, key: str, value: str) -> None:
        try:
            async with self.session_factory() as session:
                await session.merge(StorageEntry(key=key, value=value))
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write {key!r}: {e}") from e
