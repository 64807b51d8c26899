"""
Repeating refresh timer built on discord.ext.tasks.

Each iteration spawns the callback as its own task instead of awaiting it, so
a slow callback never delays the next tick and cycles may overlap when the
upstream is slower than the interval.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

from discord.ext import tasks

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Owns the single live refresh loop. start() replaces any previous one."""

    def __init__(self, callback: Callable[[], Awaitable[object]]):
        self._callback = callback
        self._inflight: Set[asyncio.Task] = set()
        self._loop = tasks.loop(seconds=1)(self._tick)
        self.interval_ms: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self._loop.is_running()

    def start(self, interval_ms: int) -> None:
        """Re-arm the loop at interval_ms, cancelling the current one first."""
        self.interval_ms = interval_ms
        self._loop.change_interval(seconds=interval_ms / 1000)
        if self._loop.is_running():
            # restart() waits for the cancelled task before launching the new one
            self._loop.restart()
        else:
            self._loop.start()
        logger.info(f"Price updates running every {interval_ms / 1000:g}s")

    def stop(self) -> None:
        self._loop.cancel()

    async def _tick(self) -> None:
        # The first iteration runs at start(); ticks begin one interval later
        if self._loop.current_loop == 0:
            return
        tick = asyncio.create_task(self._callback())
        self._inflight.add(tick)
        tick.add_done_callback(self._inflight.discard)
