"""
Shutdown coordination

RUNNING -> SHUTTING_DOWN -> STOPPED. STOPPED is reached only after the
periodic write-back task has exited and one final flush has been attempted.
"""
import asyncio
import logging
from enum import Enum
from typing import Awaitable, Optional

from leaderboard.core.persistence import PersistenceController


logger = logging.getLogger(__name__)


class Phase(str, Enum):
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class ShutdownCoordinator:
    """Owns the periodic write-back task and the final flush"""

    def __init__(self, persistence: PersistenceController):
        self.persistence = persistence
        self.phase = Phase.RUNNING
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None
        self._final_result: Optional[bool] = None

    def start(self) -> None:
        """Start periodic write-back on the running event loop"""
        self._loop = asyncio.get_running_loop()
        self._stop = asyncio.Event()
        self._task = self._loop.create_task(self.persistence.run_periodic(self._stop))

    def request_shutdown(self, reason: str = "requested") -> None:
        """
        Enter SHUTTING_DOWN and wake the write-back task

        Safe to call from a signal handler or from another thread.
        """
        if self.phase is not Phase.RUNNING:
            return
        self.phase = Phase.SHUTTING_DOWN
        logger.info(f"🛑 Shutting down ({reason})")
        if self._loop is not None and self._stop is not None:
            self._loop.call_soon_threadsafe(self._stop.set)

    async def shutdown(self, drain: Optional[Awaitable] = None) -> Optional[bool]:
        """
        Stop write-back, wait for drain, then flush one last time

        Args:
            drain: Awaited before the final flush (in-flight requests finishing)

        Returns:
            Result of the final flush
        """
        if self.phase is Phase.STOPPED:
            return self._final_result

        self.request_shutdown()
        if self._stop is not None:
            self._stop.set()

        if drain is not None:
            await drain

        if self._task is not None:
            try:
                await self._task
            except Exception:
                logger.exception("Periodic write-back task failed")
            self._task = None

        self._final_result = await asyncio.to_thread(self.persistence.flush)
        if not self._final_result:
            logger.error("❌ Final write-back failed, recent submissions may be lost")
        self.phase = Phase.STOPPED
        logger.info("Stopped")
        return self._final_result
