from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.deps import get_document_repository
from app.api.http.health import router as health_router
from app.api.http.documents import router as documents_router
from app.api.http.assistant import router as assistant_router
from app.api.ws.sync import router as editor_router
from app.core.config import settings
from app.core.db import init_models
from app.domains.documents.services import DocumentService

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Создание таблиц и демонстрационных документов при запуске"""
    await init_models()

    if settings.seed_demo_documents:
        await DocumentService(get_document_repository()).seed_demo_documents()

    logger.info("BlockDocs started")
    yield


app = FastAPI(
    title="BlockDocs",
    description="Блочный редактор документов с локальным хранилищем",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключаем роутеры
app.include_router(health_router)
app.include_router(documents_router)
app.include_router(assistant_router)
app.include_router(editor_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "BlockDocs API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
