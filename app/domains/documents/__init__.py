from app.domains.documents.entities import (
    Block, BlockType, Document, HeadingBlock, ListBlock, build_block, create_block
)
from app.domains.documents.classifier import Classification, classify_text
from app.domains.documents.markdown import export_to_markdown, render_export
from app.domains.documents.mutations import (
    autoformat_block, convert_block, delete_block, duplicate_block, insert_block,
    move_block, rename_document, set_starred, update_block
)
from app.domains.documents.search import filter_documents, sort_documents

__all__ = [
    "Block", "BlockType", "Document", "HeadingBlock", "ListBlock", "build_block", "create_block",
    "Classification", "classify_text",
    "export_to_markdown", "render_export",
    "autoformat_block", "convert_block", "delete_block", "duplicate_block", "insert_block",
    "move_block", "rename_document", "set_starred", "update_block",
    "filter_documents", "sort_documents"
]
