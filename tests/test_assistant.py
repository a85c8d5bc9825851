from __future__ import annotations

import random

import pytest

from app.domains.assistant.services import CANNED_SUGGESTIONS, AssistantService


def test_ask_returns_canned_suggestion() -> None:
    service = AssistantService(random.Random(1))
    reply = service.ask("Help me", selected_text="Some text")

    assert reply.suggestion in CANNED_SUGGESTIONS
    assert reply.selected_text == "Some text"


def test_same_seed_same_answer() -> None:
    first = AssistantService(random.Random(7)).ask("q")
    second = AssistantService(random.Random(7)).ask("q")
    assert first.suggestion == second.suggestion


def test_empty_query_rejected() -> None:
    with pytest.raises(ValueError):
        AssistantService().ask("   ")


def test_quick_action_prompts() -> None:
    service = AssistantService()

    assert service.build_prompt("grammar", "teh cat") == 'Fix the grammar in: "teh cat"'
    assert service.build_prompt("dance") == "Help me with: dance"
    assert service.quick_action("summarize", "Long text").prompt == 'Summarize this: "Long text"'
