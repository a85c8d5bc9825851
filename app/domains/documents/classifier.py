import re
from typing import NamedTuple, Optional

from app.domains.documents.entities import BlockType


class Classification(NamedTuple):
    """Результат распознавания набранной строки"""
    type: BlockType
    content: str
    level: Optional[int] = None


NUMBERED_PREFIX = re.compile(r"^\d+\. ")


def classify_text(text: str) -> Classification:
    """Определение типа блока по префиксу строки.

    Правила проверяются по порядку, срабатывает первое подходящее.
    """
    if text.startswith("# "):
        return Classification(BlockType.HEADING, text[2:], 1)
    if text.startswith("## "):
        return Classification(BlockType.HEADING, text[3:], 2)
    if text.startswith("### "):
        return Classification(BlockType.HEADING, text[4:], 3)
    if text.startswith("- ") or text.startswith("* "):
        return Classification(BlockType.BULLET_LIST, text[2:])

    match = NUMBERED_PREFIX.match(text)
    if match:
        return Classification(BlockType.NUMBERED_LIST, text[match.end():])

    if text.startswith("> "):
        return Classification(BlockType.QUOTE, text[2:])
    if text.startswith("```"):
        return Classification(BlockType.CODE, text[3:])

    return Classification(BlockType.PARAGRAPH, text)
