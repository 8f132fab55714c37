"""Background eviction of expired form sessions."""

import asyncio

from ..logging_config import get_logger
from .engine import FormSessionEngine

logger = get_logger(__name__)


class FormSessionSweeper:
    """Periodically runs ``FormSessionEngine.sweep_expired``."""

    def __init__(self, engine: FormSessionEngine, interval: float = 300.0):
        self._engine = engine
        self._interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the sweep loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Form session sweeper started (every %ss)", self._interval)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._engine.sweep_expired()
            except Exception as e:
                logger.error("Form session sweep failed: %s", e, exc_info=True)
