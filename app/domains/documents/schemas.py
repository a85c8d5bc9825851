import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domains.documents.entities import (
    DEFAULT_TITLE, Block, BlockType, Document, build_block, new_block_id, parse_block_type
)

logger = logging.getLogger(__name__)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Метка времени без часового пояса считается UTC"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CamelModel(BaseModel):
    """Схема с camelCase-именами в JSON и приемом snake_case на входе"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BlockSchema(CamelModel):
    """Блок в хранилище и в ответах API"""
    id: str
    type: str = BlockType.PARAGRAPH.value
    content: str = ""
    level: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v):
        return "" if v is None else v

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v):
        return ensure_utc(v)

    @classmethod
    def from_entity(cls, block: Block) -> "BlockSchema":
        return cls(
            id=block.id,
            type=block.type.value,
            content=block.content,
            level=getattr(block, "level", None),
            created_at=block.created_at,
            updated_at=block.updated_at,
        )

    def to_entity(self) -> Block:
        """Преобразование в доменный блок; неизвестный тип становится абзацем"""
        try:
            block_type = parse_block_type(self.type)
        except ValueError:
            logger.warning(f"Unknown block type {self.type!r} in block {self.id}, loading as paragraph")
            block_type = BlockType.PARAGRAPH

        return build_block(
            type=block_type,
            id=self.id,
            content=self.content,
            level=self.level,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class DocumentSchema(CamelModel):
    """Документ в том виде, в котором он лежит в хранилище"""
    id: str
    title: str = DEFAULT_TITLE
    content: List[BlockSchema] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_starred: bool = False

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v):
        return v or DEFAULT_TITLE

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v):
        return v or []

    @field_validator("created_at", "updated_at")
    @classmethod
    def validate_timestamps(cls, v):
        return ensure_utc(v)

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentSchema":
        return cls(
            id=document.id,
            title=document.title,
            content=[BlockSchema.from_entity(block) for block in document.content],
            created_at=document.created_at,
            updated_at=document.updated_at,
            is_starred=document.is_starred,
        )

    def to_entity(self) -> Document:
        """Преобразование в доменный документ.

        Повторяющиеся id блоков (например, после ручной правки хранилища)
        заменяются новыми, чтобы документ оставался корректным.
        """
        blocks = []
        seen = set()
        for schema in self.content:
            block = schema.to_entity()
            if block.id in seen:
                new_id = new_block_id()
                logger.warning(f"Duplicate block id {block.id} in document {self.id}, reissued as {new_id}")
                block = build_block(**{**block.to_fields(), "id": new_id})
            seen.add(block.id)
            blocks.append(block)

        return Document(
            id=self.id,
            title=self.title,
            content=blocks,
            created_at=self.created_at,
            updated_at=self.updated_at,
            is_starred=self.is_starred,
        )

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DocumentResponse(DocumentSchema):
    """Схема для ответа с данными документа"""
    word_count: int
    content_length: int

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentResponse":
        base = DocumentSchema.from_entity(document)
        return cls(
            **base.model_dump(),
            word_count=document.get_word_count(),
            content_length=document.get_content_length(),
        )


class DocumentListResponse(CamelModel):
    """Схема для списка документов"""
    documents: List[DocumentResponse]
    total: int
    sort_by: str


class DocumentCreate(CamelModel):
    """Схема для создания документа"""
    title: Optional[str] = Field(None, max_length=255)
    template_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip() if v else v


class DocumentUpdate(CamelModel):
    """Схема для обновления документа целиком или частично"""
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[List[BlockSchema]] = None
    is_starred: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip() if v else v


class BlockCreate(CamelModel):
    """Схема для добавления блока"""
    type: str = BlockType.PARAGRAPH.value
    content: str = ""
    level: Optional[int] = None
    after_block_id: Optional[str] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        return parse_block_type(v).value


class BlockUpdate(CamelModel):
    """Схема для частичного обновления блока"""
    type: Optional[str] = None
    content: Optional[str] = None
    level: Optional[int] = Field(None, ge=1, le=3)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        return parse_block_type(v).value if v is not None else v

    def to_patch(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class BlockConvertRequest(CamelModel):
    action: str


class BlockMoveRequest(CamelModel):
    after_block_id: Optional[str] = None


class BlockAutoformatRequest(CamelModel):
    text: str


class ClassifyRequest(CamelModel):
    text: str


class ClassifyResponse(CamelModel):
    type: str
    content: str
    level: Optional[int] = None


class DocumentSearchRequest(CamelModel):
    """Схема для поиска документов"""
    query: str = Field("", max_length=100)


class DocumentSearchResponse(CamelModel):
    """Схема для ответа с результатами поиска"""
    documents: List[DocumentResponse]
    total_found: int
    query: str
    search_time_ms: int


class DocumentStatsResponse(CamelModel):
    """Схема для статистики документа"""
    document_id: str
    title: str
    word_count: int
    character_count: int
    block_count: int
    last_modified: Optional[datetime] = None
    created_at: Optional[datetime] = None


class DocumentExportRequest(CamelModel):
    """Схема для запроса на экспорт документа"""
    format: str = Field("md", pattern="^(txt|md|html)$")


class DocumentExportResponse(CamelModel):
    """Схема для ответа с экспортированным документом"""
    document_id: str
    format: str
    filename: str
    content: str
    exported_at: datetime


class TemplateResponse(CamelModel):
    id: str
    name: str
    description: str
    category: str
