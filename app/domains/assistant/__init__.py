from app.domains.assistant.services import AssistantReply, AssistantService, AssistantSuggestion
from app.domains.assistant.schemas import (
    AssistantRequest, AssistantResponse, QuickActionRequest, QuickActionResponse
)

__all__ = [
    "AssistantReply", "AssistantService", "AssistantSuggestion",
    "AssistantRequest", "AssistantResponse", "QuickActionRequest", "QuickActionResponse"
]
