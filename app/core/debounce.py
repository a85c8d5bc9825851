import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Отложенный вызов корутины с перезапуском таймера.

    Каждый вызов ``schedule`` отменяет ожидающий вызов и планирует новый,
    поэтому серия правок приводит к одному вызову ``callback`` спустя
    ``delay`` секунд после последней правки.
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[object]]):
        self.delay = delay
        self.callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        """Есть ли запланированный вызов"""
        return self._task is not None and not self._task.done()

    def schedule(self) -> None:
        """Отмена ожидающего вызова и планирование нового"""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        """Отмена запланированного вызова"""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def flush(self) -> bool:
        """Немедленный запуск запланированного вызова.

        Возвращает True, если вызов был запланирован и выполнен.
        """
        if not self.pending:
            return False

        self.cancel()
        await self.callback()
        return True

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        self._task = None
        logger.debug(f"Debounced call fired after {self.delay}s")
        await self.callback()
