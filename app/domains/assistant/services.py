import logging
import random
import uuid
from typing import Dict, List, NamedTuple, Optional

logger = logging.getLogger(__name__)


class AssistantSuggestion(NamedTuple):
    type: str
    title: str
    content: str
    context: str
    actions: List[str]


# Заготовленные ответы ассистента
CANNED_SUGGESTIONS: List[AssistantSuggestion] = [
    AssistantSuggestion(
        "suggestion", "Content Enhancement",
        "I can help you expand this section with more detailed examples and supporting information.",
        "paragraph", ["Expand", "Add Examples", "Improve Clarity"],
    ),
    AssistantSuggestion(
        "grammar", "Grammar Check",
        "Consider revising this sentence for better readability and flow.",
        "sentence", ["Fix Grammar", "Improve Tone", "Simplify"],
    ),
    AssistantSuggestion(
        "structure", "Document Structure",
        "This section might work better as a bulleted list for improved readability.",
        "block", ["Convert to List", "Add Headings", "Reorganize"],
    ),
    AssistantSuggestion(
        "completion", "Smart Completion",
        "Based on your writing pattern, here are some suggested continuations for this paragraph.",
        "writing", ["Accept Suggestion", "Generate Alternative", "Continue Writing"],
    ),
    AssistantSuggestion(
        "research", "Research Assistant",
        "I found some relevant information that might support your argument in this section.",
        "topic", ["Add Citation", "Include Facts", "Verify Information"],
    ),
]

QUICK_ACTIONS: Dict[str, str] = {
    "improve": 'Please improve this text: "{text}"',
    "grammar": 'Fix the grammar in: "{text}"',
    "shorten": 'Make this text shorter: "{text}"',
    "explain": 'Explain this: "{text}"',
    "continue": 'Continue writing from: "{text}"',
    "summarize": 'Summarize this: "{text}"',
}

QUICK_ACTION_LABELS: Dict[str, str] = {
    "improve": "Improve writing",
    "grammar": "Fix grammar",
    "shorten": "Make shorter",
    "explain": "Explain this",
    "continue": "Continue writing",
    "summarize": "Summarize",
}


class AssistantReply(NamedTuple):
    id: str
    prompt: str
    selected_text: str
    suggestion: AssistantSuggestion


class AssistantService:
    """Имитация ИИ-ассистента: случайный ответ из заготовленных"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def ask(self, query: str, selected_text: str = "") -> AssistantReply:
        """Ответ на произвольный запрос"""
        if not query.strip():
            raise ValueError("Query cannot be empty")

        suggestion = self.rng.choice(CANNED_SUGGESTIONS)
        logger.info(f"Assistant answered with {suggestion.type} suggestion")
        return AssistantReply(
            id=uuid.uuid4().hex,
            prompt=query,
            selected_text=selected_text,
            suggestion=suggestion,
        )

    def build_prompt(self, action: str, selected_text: str = "") -> str:
        """Текст запроса для быстрого действия"""
        template = QUICK_ACTIONS.get(action)
        if template is None:
            return f"Help me with: {action}"
        return template.format(text=selected_text)

    def quick_action(self, action: str, selected_text: str = "") -> AssistantReply:
        return self.ask(self.build_prompt(action, selected_text), selected_text)
