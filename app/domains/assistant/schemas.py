from typing import List

from pydantic import Field

from app.domains.assistant.services import AssistantReply
from app.domains.documents.schemas import CamelModel


class AssistantRequest(CamelModel):
    """Запрос к ассистенту"""
    query: str = Field(..., min_length=1, max_length=2000)
    selected_text: str = ""


class QuickActionRequest(CamelModel):
    selected_text: str = ""


class QuickActionResponse(CamelModel):
    action: str
    label: str


class AssistantResponse(CamelModel):
    """Ответ ассистента"""
    id: str
    prompt: str
    selected_text: str
    type: str
    title: str
    content: str
    actions: List[str]

    @classmethod
    def from_reply(cls, reply: AssistantReply) -> "AssistantResponse":
        return cls(
            id=reply.id,
            prompt=reply.prompt,
            selected_text=reply.selected_text,
            type=reply.suggestion.type,
            title=reply.suggestion.title,
            content=reply.suggestion.content,
            actions=list(reply.suggestion.actions),
        )
