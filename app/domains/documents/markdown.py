"""Экспорт документа в markdown, текст и HTML"""
import html
from typing import Callable, Dict

from app.domains.documents.entities import Block, BlockType, Document


def block_to_markdown(block: Block) -> str:
    """Markdown одного блока вместе с завершающими переводами строк"""
    if block.type == BlockType.HEADING:
        return "#" * block.level + " " + block.content + "\n\n"
    elif block.type == BlockType.BULLET_LIST:
        # Префикс у каждой строки-пункта, а не только у первой строки блока
        return "".join(f"- {item}\n" for item in block.items)
    elif block.type == BlockType.NUMBERED_LIST:
        # Номер всегда "1.", markdown-рендеры нумеруют сами
        return "".join(f"1. {item}\n" for item in block.items)
    elif block.type == BlockType.QUOTE:
        return "> " + block.content + "\n\n"
    elif block.type == BlockType.CODE:
        return "```\n" + block.content + "\n```\n\n"
    return block.content + "\n\n"


def export_to_markdown(document: Document) -> str:
    """Экспорт блоков документа в markdown"""
    return "".join(block_to_markdown(block) for block in document.content).strip()


def export_to_text(document: Document) -> str:
    """Экспорт в простой текст: содержимое блоков через пустую строку"""
    return "\n\n".join(block.content for block in document.content).strip()


def block_to_html(block: Block) -> str:
    text = html.escape(block.content)

    if block.type == BlockType.HEADING:
        return f"<h{block.level}>{text}</h{block.level}>"
    elif block.type in (BlockType.BULLET_LIST, BlockType.NUMBERED_LIST):
        tag = "ul" if block.type == BlockType.BULLET_LIST else "ol"
        items = "".join(f"<li>{html.escape(item)}</li>" for item in block.items)
        return f"<{tag}>{items}</{tag}>"
    elif block.type == BlockType.QUOTE:
        return f"<blockquote>{text}</blockquote>"
    elif block.type == BlockType.CODE:
        return f"<pre><code>{text}</code></pre>"
    return f"<p>{text}</p>"


def export_to_html(document: Document) -> str:
    """Экспорт в HTML-страницу"""
    title = html.escape(document.title)
    body = "\n".join(block_to_html(block) for block in document.content)
    return (
        "<!DOCTYPE html>\n"
        f"<html>\n<head>\n<title>{title}</title>\n</head>\n"
        f"<body>\n{body}\n</body>\n</html>"
    )


EXPORTERS: Dict[str, Callable[[Document], str]] = {
    "md": export_to_markdown,
    "txt": export_to_text,
    "html": export_to_html,
}


def render_export(document: Document, format_type: str) -> str:
    """Экспорт документа в указанном формате"""
    if format_type not in EXPORTERS:
        raise ValueError(f"Unsupported format: {format_type}")
    return EXPORTERS[format_type](document)
