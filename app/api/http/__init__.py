from app.api.http.health import router as health_router
from app.api.http.documents import router as documents_router
from app.api.http.assistant import router as assistant_router

__all__ = [
    "health_router",
    "documents_router",
    "assistant_router"
]
