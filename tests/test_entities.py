from __future__ import annotations

import pytest

from app.domains.documents.entities import (
    BlockType,
    BulletListBlock,
    Document,
    HeadingBlock,
    ParagraphBlock,
    build_block,
    create_block,
    parse_block_type,
)


def test_heading_level_is_clamped() -> None:
    assert build_block("heading", "b1", "Title", level=7).level == 3
    assert build_block("heading", "b1", "Title", level=0).level == 1
    assert build_block("heading", "b1", "Title").level == 1


def test_non_heading_has_no_level() -> None:
    block = build_block("paragraph", "b1", "Body", level=2)
    assert isinstance(block, ParagraphBlock)
    assert not hasattr(block, "level")


def test_short_list_names_are_aliases() -> None:
    assert parse_block_type("bullet") is BlockType.BULLET_LIST
    assert parse_block_type("numbered") is BlockType.NUMBERED_LIST
    assert isinstance(build_block("bullet", "b1", "a\nb"), BulletListBlock)


def test_unknown_block_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_block("table", "b1", "x")


def test_input_shape_per_type() -> None:
    assert HeadingBlock.single_line is True
    assert ParagraphBlock.single_line is False
    assert BulletListBlock.single_line is False


def test_list_items_are_lines() -> None:
    block = build_block("bullet-list", "b1", "one\ntwo\nthree")
    assert block.items == ["one", "two", "three"]


def test_replace_changes_type_but_keeps_id() -> None:
    block = build_block("paragraph", "b1", "Intro")
    heading = block.replace(type="heading", level=2, id="other")

    assert isinstance(heading, HeadingBlock)
    assert heading.id == "b1"
    assert heading.level == 2
    assert heading.content == "Intro"


def test_create_block_ids_are_unique() -> None:
    ids = {create_block().id for _ in range(1000)}
    assert len(ids) == 1000


def test_create_block_stamps_creation_time(fake_clock) -> None:
    block = create_block("quote", "Wise words")
    assert block.created_at is not None
    assert block.type is BlockType.QUOTE


def test_document_rejects_duplicate_block_ids() -> None:
    blocks = [build_block("paragraph", "b1", "a"), build_block("paragraph", "b1", "b")]
    with pytest.raises(ValueError):
        Document(id="d1", content=blocks)


def test_new_document_starts_with_heading_and_paragraph() -> None:
    document = Document.create_document()

    assert document.title == "Untitled Document"
    assert [b.type for b in document.content] == [BlockType.HEADING, BlockType.PARAGRAPH]
    assert document.content[0].content == "Untitled Document"
    assert document.created_at == document.updated_at


def test_word_count_covers_headings_and_paragraphs_only() -> None:
    document = Document(
        id="d1",
        content=[
            build_block("heading", "b1", "Two words", level=1),
            build_block("paragraph", "b2", "  three   more words "),
            build_block("bullet-list", "b3", "ignored list items"),
        ],
    )
    assert document.get_word_count() == 5
