from fastapi import APIRouter

from app.core import clock

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Проверка работоспособности"""
    return {"status": "ok", "timestamp": clock.utcnow().isoformat()}
