from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from app.db.base import Base


class StorageEntry(Base):
    """Запись key-value хранилища (аналог localStorage)"""
    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
