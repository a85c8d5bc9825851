from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_assistant_service
from app.domains.assistant.schemas import (
    AssistantRequest, AssistantResponse, QuickActionRequest, QuickActionResponse
)
from app.domains.assistant.services import QUICK_ACTION_LABELS, AssistantService

router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.get("/actions", response_model=List[QuickActionResponse])
async def get_quick_actions():
    """Список быстрых действий ассистента"""
    return [
        QuickActionResponse(action=action, label=label)
        for action, label in QUICK_ACTION_LABELS.items()
    ]


@router.post("/ask", response_model=AssistantResponse)
async def ask_assistant(
    request: AssistantRequest,
    assistant: AssistantService = Depends(get_assistant_service)
):
    """Вопрос ассистенту"""
    try:
        reply = assistant.ask(request.query, request.selected_text)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
    return AssistantResponse.from_reply(reply)


@router.post("/actions/{action}", response_model=AssistantResponse)
async def run_quick_action(
    action: str,
    request: QuickActionRequest,
    assistant: AssistantService = Depends(get_assistant_service)
):
    """Быстрое действие над выделенным текстом"""
    reply = assistant.quick_action(action, request.selected_text)
    return AssistantResponse.from_reply(reply)
