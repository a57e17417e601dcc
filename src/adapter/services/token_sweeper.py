import asyncio
import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.maintenance import SweepExpiredTokensUseCase

logger = logging.getLogger(__name__)


class TokenSweeper:
    """
    Background task that runs the expired-token sweep on a fixed interval.

    Each pass opens its own session. A failed pass is logged and the loop
    carries on.
    """

    def __init__(self, session_factory: sessionmaker, interval_seconds: float = 300):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self._running = False
        self._task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        """Start the background sweeper."""
        if self._running:
            logger.warning("Token sweeper already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Token sweeper started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the background sweeper."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Token sweeper stopped")

    async def run_once(self) -> int:
        async with self.session_factory() as session:
            result = await SweepExpiredTokensUseCase(SqlAlchemyUnitOfWork(session)).execute()
        return result.value.total

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.run_once()
            except Exception as exc:
                logger.error(f"Token sweep failed: {type(exc).__name__}: {exc}")

            await asyncio.sleep(self.interval_seconds)
