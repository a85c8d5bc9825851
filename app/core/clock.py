from datetime import datetime, timezone


def utcnow() -> datetime:
    """Текущее время в UTC (с таймзоной)"""
    return datetime.now(timezone.utc)
