from app.db.models.storage import StorageEntry

__all__ = [
    "StorageEntry"
]
