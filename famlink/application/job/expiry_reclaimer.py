"""Expiry reclaimer.

Background job that expires overdue pending invitations: once when it
starts (to catch invitations that lapsed while the process was down) and
then on the configured cron schedule (UTC).
"""

import asyncio
import contextlib
from datetime import datetime

import logfire
from croniter import croniter
from dishka import AsyncContainer

from famlink.config import InvitationSettings
from famlink.domain.model.common import utc_now
from famlink.domain.service import ConnectionService


def next_run_after(now: datetime, schedule: str) -> datetime:
    """Next fire time of the cron schedule strictly after now."""
    return croniter(schedule, now).get_next(datetime)


class ExpiryReclaimer:
    """Scheduled sweep of overdue invitations.

    Holds no domain state: every run opens its own DI request scope (its own
    session and transaction) and relies on the conditional bulk update in
    ConnectionRepository.expire_due, so overlapping or repeated runs never
    expire a row twice. The owner (the app lifespan) calls start and stop.
    """

    def __init__(
        self,
        container: AsyncContainer,
        settings: InvitationSettings,
        stop_timeout: float = 10,
    ) -> None:
        self.container = container
        self.settings = settings
        self.stop_timeout = stop_timeout
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Run one sweep.

        Returns:
            Number of invitations this run expired
        """
        with logfire.span("expiry_reclaimer.run_once"):
            async with self.container() as request_container:
                connection_service = await request_container.get(ConnectionService)
                expired = await connection_service.expire_due()
            logfire.info("Expiry sweep finished", expired=len(expired))
            return len(expired)

    async def _safe_run(self) -> None:
        try:
            await self.run_once()
        except Exception as e:
            # Due rows stay pending, so the next run picks them up
            logfire.error("Expiry sweep failed", error=str(e))

    async def _loop(self) -> None:
        await self._safe_run()

        while not self._stop_event.is_set():
            now = utc_now()
            delay = (next_run_after(now, self.settings.sweep_cron) - now).total_seconds()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
                return
            except asyncio.TimeoutError:
                pass
            await self._safe_run()

    def start(self) -> None:
        """Start the job: one immediate sweep, then one per scheduled run."""
        if self.running:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._loop(), name="ExpiryReclaimer")
        logfire.info("Expiry reclaimer started", sweep_cron=self.settings.sweep_cron)

    async def stop(self) -> None:
        """Stop the job.

        An in-flight sweep gets stop_timeout seconds to finish; after that it
        is cancelled and its transaction rolled back.
        """
        self._stop_event.set()
        if self._task is not None:
            try:
                await asyncio.wait_for(self._task, timeout=self.stop_timeout)
            except asyncio.TimeoutError:
                self._task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self._task
            self._task = None
        logfire.info("Expiry reclaimer stopped")
