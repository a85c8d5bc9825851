"""Шаблоны документов и демонстрационные документы"""
from datetime import datetime, timezone
from typing import Dict, List, NamedTuple, Optional, Tuple

from app.domains.documents.entities import BlockType, Document, build_block, create_block

# (тип, содержимое, уровень заголовка)
BlockSpec = Tuple[BlockType, str, Optional[int]]


class DocumentTemplate(NamedTuple):
    id: str
    name: str
    description: str
    category: str
    blocks: List[BlockSpec]

    def build_blocks(self):
        """Блоки шаблона с новыми идентификаторами"""
        return [create_block(block_type, content, level) for block_type, content, level in self.blocks]


TEMPLATES: Dict[str, DocumentTemplate] = {
    template.id: template
    for template in (
        DocumentTemplate(
            id="meeting-notes",
            name="Meeting Notes",
            description="Structure your meeting notes with agenda, discussions, and action items",
            category="productivity",
            blocks=[
                (BlockType.HEADING, "Meeting Title", 1),
                (BlockType.PARAGRAPH, "Date: \nAttendees: \nDuration: ", None),
                (BlockType.HEADING, "Agenda", 2),
                (BlockType.NUMBERED_LIST, "Item 1\nItem 2\nItem 3", None),
                (BlockType.HEADING, "Action Items", 2),
                (BlockType.BULLET_LIST, "Action item with owner and deadline", None),
            ],
        ),
        DocumentTemplate(
            id="project-proposal",
            name="Project Proposal",
            description="Present your project ideas with clear objectives and timeline",
            category="business",
            blocks=[
                (BlockType.HEADING, "Project Proposal", 1),
                (BlockType.HEADING, "Executive Summary", 2),
                (BlockType.PARAGRAPH, "Brief overview of the project and its expected impact...", None),
                (BlockType.HEADING, "Objectives", 2),
                (BlockType.BULLET_LIST, "Primary objective\nSecondary objectives\nSuccess metrics", None),
            ],
        ),
        DocumentTemplate(
            id="research-notes",
            name="Research Notes",
            description="Organize your research findings and references",
            category="academic",
            blocks=[
                (BlockType.HEADING, "Research Topic", 1),
                (BlockType.HEADING, "Key Findings", 2),
                (BlockType.BULLET_LIST, "Finding 1 with source\nFinding 2 with source\nFinding 3 with source", None),
                (BlockType.HEADING, "References", 2),
                (BlockType.NUMBERED_LIST, "Reference 1\nReference 2\nReference 3", None),
            ],
        ),
    )
}


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def demo_documents() -> List[Document]:
    """Набор документов для первого запуска"""
    def doc(id, title, blocks, created, updated, starred=False):
        return Document(
            id=id,
            title=title,
            content=[build_block(t, f"block-{n}", c, level) for n, t, c, level in blocks],
            created_at=_ts(created),
            updated_at=_ts(updated),
            is_starred=starred,
        )

    return [
        doc("1", "Getting Started Guide", [
            (1, BlockType.HEADING, "Welcome to Your Document Editor", 1),
            (2, BlockType.PARAGRAPH, "This is a powerful AI-powered document editor that helps you "
                                     "create and edit documents with intelligent assistance.", None),
            (3, BlockType.HEADING, "Key Features", 2),
            (4, BlockType.BULLET_LIST, "Real-time AI assistance\nSmart content suggestions\n"
                                       "Collaborative editing\nRich text formatting", None),
            (5, BlockType.PARAGRAPH, "Start typing anywhere to begin creating your document. The AI "
                                     "sidebar will provide contextual help and suggestions as you work.", None),
        ], "2024-01-15T10:30:00", "2024-01-15T14:45:00", starred=True),
        doc("2", "Project Planning Template", [
            (6, BlockType.HEADING, "Project Overview", 1),
            (7, BlockType.PARAGRAPH, "Define your project goals, timeline, and key deliverables in this "
                                     "comprehensive planning template.", None),
            (8, BlockType.HEADING, "Objectives", 2),
            (9, BlockType.NUMBERED_LIST, "Identify project scope and requirements\nEstablish timeline and "
                                         "milestones\nAllocate resources and responsibilities\n"
                                         "Define success metrics", None),
        ], "2024-01-14T09:15:00", "2024-01-16T11:20:00"),
        doc("3", "Meeting Notes - Q1 Review", [
            (12, BlockType.HEADING, "Q1 Review Meeting", 1),
            (13, BlockType.PARAGRAPH, "Date: January 16, 2024\nAttendees: Sarah, Mike, Alex, Jennifer\n"
                                      "Duration: 2 hours", None),
            (16, BlockType.HEADING, "Action Items", 2),
            (17, BlockType.NUMBERED_LIST, "Sarah to finalize Q2 budget proposal\nMike to coordinate with "
                                          "design team\nAlex to prepare customer feedback report", None),
        ], "2024-01-16T15:30:00", "2024-01-16T16:45:00", starred=True),
        doc("4", "Untitled Document", [
            (18, BlockType.PARAGRAPH, "Start writing your thoughts here...", None),
        ], "2024-01-17T08:00:00", "2024-01-17T08:00:00"),
    ]
