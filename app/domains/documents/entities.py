import itertools
import uuid
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple, Type, Union

from app.core import clock

DEFAULT_TITLE = "Untitled Document"

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 3

# Поля, которые можно менять через Block.replace
BLOCK_PATCH_FIELDS = frozenset({"type", "content", "level", "created_at", "updated_at"})


class BlockType(str, Enum):
    """Типы блоков документа"""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET_LIST = "bullet-list"
    NUMBERED_LIST = "numbered-list"
    QUOTE = "quote"
    CODE = "code"


# Короткие имена списков, которые использует классификатор ввода
BLOCK_TYPE_ALIASES: Dict[str, BlockType] = {
    "bullet": BlockType.BULLET_LIST,
    "numbered": BlockType.NUMBERED_LIST,
}


def parse_block_type(value: Union[str, BlockType]) -> BlockType:
    """Преобразование строки в тип блока с учетом псевдонимов"""
    if isinstance(value, BlockType):
        return value
    if value in BLOCK_TYPE_ALIASES:
        return BLOCK_TYPE_ALIASES[value]
    try:
        return BlockType(value)
    except ValueError:
        raise ValueError(f"Unknown block type: {value!r}") from None


def clamp_heading_level(level: Optional[int]) -> int:
    if level is None:
        return MIN_HEADING_LEVEL
    return max(MIN_HEADING_LEVEL, min(MAX_HEADING_LEVEL, int(level)))


_block_counter = itertools.count(1)


def new_block_id() -> str:
    """Идентификатор блока, уникальный в пределах жизни процесса"""
    return f"{uuid.uuid4().hex[:12]}-{next(_block_counter)}"


@dataclass(frozen=True)
class Block:
    """Блок документа - минимальная адресуемая единица содержимого"""

    type: ClassVar[BlockType]
    # Однострочное поле ввода (заголовок) или растущая текстовая область
    single_line: ClassVar[bool] = False

    id: str
    content: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_fields(self) -> dict:
        """Поля блока в виде словаря, включая тип"""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["type"] = self.type
        return data

    def replace(self, **patch) -> "Block":
        """Поверхностное слияние полей; может сменить тип, но не id"""
        patch.pop("id", None)
        unknown = sorted(set(patch) - BLOCK_PATCH_FIELDS)
        if unknown:
            raise ValueError(f"Unknown block field(s): {', '.join(unknown)}")

        data = self.to_fields()
        data.update(patch)
        return build_block(**data)

    def get_word_count(self) -> int:
        return len(self.content.split())


@dataclass(frozen=True)
class HeadingBlock(Block):
    type: ClassVar[BlockType] = BlockType.HEADING
    single_line: ClassVar[bool] = True

    level: int = MIN_HEADING_LEVEL

    def __post_init__(self):
        object.__setattr__(self, "level", clamp_heading_level(self.level))


@dataclass(frozen=True)
class ParagraphBlock(Block):
    type: ClassVar[BlockType] = BlockType.PARAGRAPH


@dataclass(frozen=True)
class ListBlock(Block):
    """Список; элементы хранятся строками, разделенными переводом строки"""

    @property
    def items(self) -> List[str]:
        return self.content.split("\n")


@dataclass(frozen=True)
class BulletListBlock(ListBlock):
    type: ClassVar[BlockType] = BlockType.BULLET_LIST


@dataclass(frozen=True)
class NumberedListBlock(ListBlock):
    type: ClassVar[BlockType] = BlockType.NUMBERED_LIST


@dataclass(frozen=True)
class QuoteBlock(Block):
    type: ClassVar[BlockType] = BlockType.QUOTE


@dataclass(frozen=True)
class CodeBlock(Block):
    type: ClassVar[BlockType] = BlockType.CODE


BLOCK_CLASSES: Dict[BlockType, Type[Block]] = {
    cls.type: cls
    for cls in (HeadingBlock, ParagraphBlock, BulletListBlock, NumberedListBlock, QuoteBlock, CodeBlock)
}


def build_block(
    type: Union[str, BlockType],
    id: str,
    content: str = "",
    level: Optional[int] = None,
    created_at: Optional[datetime] = None,
    updated_at: Optional[datetime] = None,
) -> Block:
    """Создание блока нужного класса по его типу"""
    block_type = parse_block_type(type)
    cls = BLOCK_CLASSES[block_type]

    if cls is HeadingBlock:
        return HeadingBlock(
            id=id,
            content=content,
            level=clamp_heading_level(level),
            created_at=created_at,
            updated_at=updated_at,
        )

    return cls(id=id, content=content, created_at=created_at, updated_at=updated_at)


def create_block(
    type: Union[str, BlockType] = BlockType.PARAGRAPH,
    content: str = "",
    level: Optional[int] = None,
) -> Block:
    """Создание нового блока с новым идентификатором"""
    return build_block(
        type=type,
        id=new_block_id(),
        content=content,
        level=level,
        created_at=clock.utcnow(),
    )


@dataclass(frozen=True)
class Document:
    """Документ: упорядоченная последовательность блоков и метаданные"""

    id: str
    title: str = DEFAULT_TITLE
    content: Tuple[Block, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_starred: bool = False

    def __post_init__(self):
        object.__setattr__(self, "content", tuple(self.content))

        seen = set()
        for block in self.content:
            if block.id in seen:
                raise ValueError(f"Duplicate block id {block.id!r} in document {self.id!r}")
            seen.add(block.id)

    @property
    def block_ids(self) -> List[str]:
        return [block.id for block in self.content]

    def find_block(self, block_id: str) -> Optional[Block]:
        """Поиск блока по id"""
        for block in self.content:
            if block.id == block_id:
                return block
        return None

    def index_of(self, block_id: str) -> int:
        """Позиция блока в документе, -1 если блока нет"""
        for index, block in enumerate(self.content):
            if block.id == block_id:
                return index
        return -1

    def get_word_count(self) -> int:
        """Подсчет слов в заголовках и абзацах"""
        return sum(
            block.get_word_count()
            for block in self.content
            if block.type in (BlockType.HEADING, BlockType.PARAGRAPH)
        )

    def get_content_length(self) -> int:
        """Количество символов во всех блоках"""
        return sum(len(block.content) for block in self.content)

    def with_changes(self, **changes) -> "Document":
        """Новая версия документа с обновленным updated_at"""
        changes.setdefault("updated_at", clock.utcnow())
        return replace(self, **changes)

    @classmethod
    def create_document(cls, title: str = DEFAULT_TITLE, id: Optional[str] = None) -> "Document":
        """Создание нового документа с заголовком и пустым абзацем"""
        now = clock.utcnow()
        return cls(
            id=id or uuid.uuid4().hex,
            title=title,
            content=(
                create_block(BlockType.HEADING, title, level=1),
                create_block(BlockType.PARAGRAPH, ""),
            ),
            created_at=now,
            updated_at=now,
        )

    def __repr__(self) -> str:
        return f"Document(id={self.id}, title={self.title}, blocks={len(self.content)})"
