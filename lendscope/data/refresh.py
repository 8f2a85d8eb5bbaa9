"""Owned, cancellable periodic market refresh."""

import asyncio
import logging
from typing import Optional

from lendscope.data.orchestrator import FetchOrchestrator

logger = logging.getLogger(__name__)


class PeriodicRefresh:
    """
    Re-runs ``load_all_markets`` on a fixed interval.

    The refresh task belongs to whoever started it: use it as an async
    context manager (or call ``stop``) so the task is cancelled when its
    owner goes away and never mutates state afterwards.

    Example:
        async with PeriodicRefresh(orchestrator, interval=60):
            await render_forever()
    """

    def __init__(self, orchestrator: FetchOrchestrator, interval: float):
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval}")
        self.orchestrator = orchestrator
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start refreshing in the background; a no-op if already running."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"refresh-{self.orchestrator.network_id}")
        logger.debug(f"Started market refresh every {self.interval}s for {self.orchestrator.network_id}")

    async def stop(self) -> None:
        """Cancel the refresh task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug(f"Stopped market refresh for {self.orchestrator.network_id}")

    async def _run(self) -> None:
        while True:
            try:
                await self.orchestrator.load_all_markets()
            except Exception as e:
                logger.error(f"Market refresh failed for {self.orchestrator.network_id}: {e}")
            self.ticks += 1
            await asyncio.sleep(self.interval)

    async def __aenter__(self) -> "PeriodicRefresh":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
