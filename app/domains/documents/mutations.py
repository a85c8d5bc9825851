"""Операции над блоками документа.

Все функции чистые: принимают документ и возвращают его новую версию со
свежим ``updated_at``, не изменяя исходный. Отсутствующий блок не считается
ошибкой - содержимое просто остается прежним.
"""
from typing import Any, Dict, Optional, Tuple

from app.core import clock
from app.domains.documents.classifier import classify_text
from app.domains.documents.entities import Block, BlockType, Document, build_block, new_block_id

# Действия меню блока: тип и уровень заголовка
CONVERT_ACTIONS: Dict[str, Tuple[BlockType, Optional[int]]] = {
    "text": (BlockType.PARAGRAPH, None),
    "h1": (BlockType.HEADING, 1),
    "h2": (BlockType.HEADING, 2),
    "h3": (BlockType.HEADING, 3),
    "quote": (BlockType.QUOTE, None),
    "code": (BlockType.CODE, None),
    "bullet-list": (BlockType.BULLET_LIST, None),
    "numbered-list": (BlockType.NUMBERED_LIST, None),
}


def insert_block(document: Document, after_block_id: Optional[str], block: Block) -> Document:
    """Вставка блока после блока с after_block_id, иначе в конец"""
    content = list(document.content)
    index = document.index_of(after_block_id) if after_block_id is not None else -1

    if index != -1:
        content.insert(index + 1, block)
    else:
        content.append(block)

    return document.with_changes(content=content)


def update_block(document: Document, block_id: str, patch: Dict[str, Any]) -> Document:
    """Слияние полей patch с блоком block_id"""
    now = clock.utcnow()
    content = [
        block.replace(**{**patch, "updated_at": now}) if block.id == block_id else block
        for block in document.content
    ]
    return document.with_changes(content=content, updated_at=now)


def delete_block(document: Document, block_id: str) -> Document:
    """Удаление блока"""
    content = [block for block in document.content if block.id != block_id]
    return document.with_changes(content=content)


def duplicate_block(document: Document, block_id: str) -> Document:
    """Копия блока с новым id сразу после оригинала"""
    block = document.find_block(block_id)
    if block is None:
        return document.with_changes()

    data = block.to_fields()
    data.update(id=new_block_id(), created_at=clock.utcnow(), updated_at=None)
    return insert_block(document, block_id, build_block(**data))


def convert_block(document: Document, block_id: str, action: str) -> Document:
    """Смена типа блока действием из меню (text, h1, quote, ...)"""
    if action not in CONVERT_ACTIONS:
        raise ValueError(f"Unknown block action: {action}")

    block_type, level = CONVERT_ACTIONS[action]
    patch: Dict[str, Any] = {"type": block_type}
    if level is not None:
        patch["level"] = level
    return update_block(document, block_id, patch)


def move_block(document: Document, block_id: str, after_block_id: Optional[str]) -> Document:
    """Перемещение блока после after_block_id, либо в начало при None"""
    block = document.find_block(block_id)
    if block is None or block_id == after_block_id:
        return document.with_changes()

    remaining = [b for b in document.content if b.id != block_id]
    if after_block_id is None:
        return document.with_changes(content=[block] + remaining)

    for index, other in enumerate(remaining):
        if other.id == after_block_id:
            remaining.insert(index + 1, block)
            return document.with_changes(content=remaining)

    return document.with_changes()


def autoformat_block(document: Document, block_id: str, text: str) -> Document:
    """Применение сокращений разметки ("# ", "- ", ...) к набранному тексту"""
    result = classify_text(text)
    patch: Dict[str, Any] = {"type": result.type, "content": result.content}
    if result.level is not None:
        patch["level"] = result.level
    return update_block(document, block_id, patch)


def rename_document(document: Document, title: str) -> Document:
    return document.with_changes(title=title)


def set_starred(document: Document, starred: bool) -> Document:
    return document.with_changes(is_starred=starred)
