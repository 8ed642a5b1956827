"""Background task that purges expired refinement sessions."""

import asyncio
import contextlib
import logging

from prompt_refiner_api.repositories.refinement_session_repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionSweeper:
    """Periodically removes expired sessions from a repository.

    Expired sessions are already invisible to reads; the sweep only reclaims
    memory held by sessions nobody asks for again.

    Usage:
        sweeper = SessionSweeper(repository, interval_seconds=1800)
        sweeper.start()
        ...
        await sweeper.stop()
    """

    def __init__(self, repository: SessionRepository, interval_seconds: float) -> None:
        self._repository = repository
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> int:
        """Purge expired sessions now. Returns the number removed."""
        removed = self._repository.purge_expired()
        logger.debug("Session sweep removed %d sessions", removed)
        return removed

    async def run(self) -> None:
        """Sweep every ``interval_seconds`` until cancelled."""
        logger.info("Session sweeper started (interval=%ss)", self._interval_seconds)
        while True:
            await asyncio.sleep(self._interval_seconds)
            try:
                self.sweep_once()
            except Exception:
                logger.exception("Session sweep failed; retrying next interval")

    def start(self) -> None:
        """Schedule ``run`` on the running event loop."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Session sweeper stopped")
