from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import get_document_service
from app.domains.documents.classifier import classify_text
from app.domains.documents.entities import Document
from app.domains.documents.schemas import (
    BlockAutoformatRequest, BlockConvertRequest, BlockCreate, BlockMoveRequest, BlockUpdate,
    ClassifyRequest, ClassifyResponse, DocumentCreate, DocumentExportRequest,
    DocumentExportResponse, DocumentListResponse, DocumentResponse, DocumentSearchRequest,
    DocumentSearchResponse, DocumentStatsResponse, DocumentUpdate, TemplateResponse
)
from app.domains.documents.search import SORT_KEYS
from app.domains.documents.services import DocumentPersistenceError, DocumentService
from app.domains.documents.templates import TEMPLATES

router = APIRouter(prefix="/documents", tags=["documents"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Document not found"
    )


def _storage_unavailable(e: DocumentPersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(e)
    )


def _invalid(e: ValueError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=str(e)
    )


def _respond(document: Optional[Document]) -> DocumentResponse:
    if not document:
        raise _not_found()
    return DocumentResponse.from_entity(document)


@router.post("/", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    service: DocumentService = Depends(get_document_service)
):
    """Создание нового документа"""
    try:
        document = await service.create_document(document_data.title, document_data.template_id)
    except ValueError as e:
        raise _invalid(e)
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return DocumentResponse.from_entity(document)


@router.get("/", response_model=DocumentListResponse)
async def get_documents(
    sort: str = Query("modified", pattern=f"^({'|'.join(SORT_KEYS)})$"),
    service: DocumentService = Depends(get_document_service)
):
    """Получение списка документов"""
    documents = await service.list_documents(sort)

    return DocumentListResponse(
        documents=[DocumentResponse.from_entity(doc) for doc in documents],
        total=len(documents),
        sort_by=sort
    )


@router.get("/templates", response_model=List[TemplateResponse])
async def get_templates():
    """Список шаблонов документов"""
    return [
        TemplateResponse(
            id=template.id,
            name=template.name,
            description=template.description,
            category=template.category
        )
        for template in TEMPLATES.values()
    ]


@router.post("/search", response_model=DocumentSearchResponse)
async def search_documents(
    search_request: DocumentSearchRequest,
    service: DocumentService = Depends(get_document_service)
):
    """Поиск документов"""
    documents, search_time = await service.search_documents(search_request.query)

    return DocumentSearchResponse(
        documents=[DocumentResponse.from_entity(doc) for doc in documents],
        total_found=len(documents),
        query=search_request.query,
        search_time_ms=search_time
    )


@router.post("/classify", response_model=ClassifyResponse)
async def classify(request: ClassifyRequest):
    """Определение типа блока по набранному тексту"""
    result = classify_text(request.text)
    return ClassifyResponse(type=result.type.value, content=result.content, level=result.level)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service)
):
    """Получение документа по id"""
    return _respond(await service.get_document(document_id))


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    update_data: DocumentUpdate,
    service: DocumentService = Depends(get_document_service)
):
    """Обновление документа"""
    try:
        document = await service.update_document(
            document_id,
            title=update_data.title,
            content=update_data.content,
            is_starred=update_data.is_starred
        )
    except ValueError as e:
        raise _invalid(e)
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return _respond(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service)
):
    """Удаление документа"""
    try:
        await service.delete_document(document_id)
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{document_id}/stats", response_model=DocumentStatsResponse)
async def get_document_stats(
    document_id: str,
    service: DocumentService = Depends(get_document_service)
):
    """Получение статистики документа"""
    stats = await service.get_document_stats(document_id)

    if not stats:
        raise _not_found()

    return DocumentStatsResponse(**stats)


@router.post("/{document_id}/export", response_model=DocumentExportResponse)
async def export_document(
    document_id: str,
    export_request: DocumentExportRequest,
    service: DocumentService = Depends(get_document_service)
):
    """Экспорт документа"""
    export_data = await service.export_document(document_id, export_request.format)

    if not export_data:
        raise _not_found()

    return DocumentExportResponse(**export_data)


# Блоки документа
@router.post("/{document_id}/blocks", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def add_block(
    document_id: str,
    block_data: BlockCreate,
    service: DocumentService = Depends(get_document_service)
):
    """Добавление блока"""
    try:
        document = await service.add_block(
            document_id,
            block_data.type,
            block_data.content,
            block_data.level,
            block_data.after_block_id
        )
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return _respond(document)


@router.patch("/{document_id}/blocks/{block_id}", response_model=DocumentResponse)
async def update_block(
    document_id: str,
    block_id: str,
    block_data: BlockUpdate,
    service: DocumentService = Depends(get_document_service)
):
    """Изменение блока"""
    try:
        document = await service.edit_block(document_id, block_id, block_data.to_patch())
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return _respond(document)


@router.delete("/{document_id}/blocks/{block_id}", response_model=DocumentResponse)
async def delete_block(
    document_id: str,
    block_id: str,
    service: DocumentService = Depends(get_document_service)
):
    """Удаление блока"""
    try:
        document = await service.remove_block(document_id, block_id)
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return _respond(document)


@router.post("/{document_id}/blocks/{block_id}/duplicate", response_model=DocumentResponse)
async def duplicate_block(
    document_id: str,
    block_id: str,
    service: DocumentService = Depends(get_document_service)
):
    """Дублирование блока"""
    try:
        document = await service.duplicate_block(document_id, block_id)
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return _respond(document)


@router.post("/{document_id}/blocks/{block_id}/convert", response_model=DocumentResponse)
async def convert_block(
    document_id: str,
    block_id: str,
    request: BlockConvertRequest,
    service: DocumentService = Depends(get_document_service)
):
    """Смена типа блока"""
    try:
        document = await service.convert_block(document_id, block_id, request.action)
    except ValueError as e:
        raise _invalid(e)
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return _respond(document)


@router.post("/{document_id}/blocks/{block_id}/move", response_model=DocumentResponse)
async def move_block(
    document_id: str,
    block_id: str,
    request: BlockMoveRequest,
    service: DocumentService = Depends(get_document_service)
):
    """Перемещение блока"""
    try:
        document = await service.move_block(document_id, block_id, request.after_block_id)
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return _respond(document)


@router.post("/{document_id}/blocks/{block_id}/autoformat", response_model=DocumentResponse)
async def autoformat_block(
    document_id: str,
    block_id: str,
    request: BlockAutoformatRequest,
    service: DocumentService = Depends(get_document_service)
):
    """Автоформатирование блока по набранному тексту"""
    try:
        document = await service.autoformat_block(document_id, block_id, request.text)
    except DocumentPersistenceError as e:
        raise _storage_unavailable(e)

    return _respond(document)
