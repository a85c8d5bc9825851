from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
import json
import logging

from app.api.deps import get_document_repository
from app.db.repositories.document_repository import DocumentRepository
from app.domains.documents.schemas import DocumentResponse
from app.domains.documents.session import EditorSession

logger = logging.getLogger(__name__)

router = APIRouter()


def _document_message(session: EditorSession) -> dict:
    return {
        "type": "document",
        "data": DocumentResponse.from_entity(session.document).model_dump(mode="json", by_alias=True)
    }


async def _send_error(websocket: WebSocket, detail: str) -> None:
    await websocket.send_text(json.dumps({"type": "error", "data": {"detail": detail}}))


def handle_operation(session: EditorSession, message_type: str, data: dict) -> bool:
    """Применение операции редактирования; False для неизвестного типа"""
    if message_type == "insert_block":
        session.insert_block(
            data.get("type", "paragraph"),
            data.get("content", ""),
            data.get("level"),
            data.get("after_block_id")
        )
    elif message_type == "update_block":
        session.update_block(data["block_id"], data.get("patch", {}))
    elif message_type == "delete_block":
        session.delete_block(data["block_id"])
    elif message_type == "duplicate_block":
        session.duplicate_block(data["block_id"])
    elif message_type == "convert_block":
        session.convert_block(data["block_id"], data["action"])
    elif message_type == "move_block":
        session.move_block(data["block_id"], data.get("after_block_id"))
    elif message_type == "autoformat_block":
        session.autoformat_block(data["block_id"], data.get("text", ""))
    elif message_type == "rename":
        session.rename(data["title"])
    else:
        return False
    return True


@router.websocket("/documents/{document_id}/ws")
async def editor_endpoint(
    websocket: WebSocket,
    document_id: str,
    repository: DocumentRepository = Depends(get_document_repository)
):
    """WebSocket эндпоинт редактора с автосохранением"""
    await websocket.accept()
    session = await EditorSession.open(repository, document_id)
    logger.info(f"Editor session opened for document {document_id}")

    await websocket.send_text(json.dumps(_document_message(session)))

    try:
        while True:
            # Получаем сообщение от клиента
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except ValueError:
                await _send_error(websocket, "Message is not valid JSON")
                continue

            if not isinstance(message, dict):
                await _send_error(websocket, "Message must be a JSON object")
                continue

            message_type = message.get("type")
            payload = message.get("data") or {}

            if message_type == "ping":
                # Ответ на ping для поддержания соединения
                await websocket.send_text(json.dumps({"type": "pong"}))

            elif message_type == "save":
                ok = await session.save()
                await websocket.send_text(json.dumps({"type": "saved", "data": {"ok": ok}}))

            elif not isinstance(payload, dict):
                await _send_error(websocket, "Message data must be a JSON object")

            else:
                try:
                    applied = handle_operation(session, message_type, payload)
                except (KeyError, TypeError, ValueError) as e:
                    await _send_error(websocket, str(e))
                    continue

                if not applied:
                    await _send_error(websocket, f"Unknown message type: {message_type}")
                    continue

                await websocket.send_text(json.dumps(_document_message(session)))

    except WebSocketDisconnect:
        logger.info(f"Editor disconnected from document {document_id}")

    finally:
        await session.close()
