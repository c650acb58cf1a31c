"""
Fixed-period tick scheduling for the game loop.

Built on the `schedule` library: every running game owns exactly one
periodic job, and the CancellationToken returned when the job is created
is the only way to stop it. Everything runs cooperatively on the thread
that calls run_pending()/run_forever().
"""

import logging
import time
from typing import Callable, Optional

import schedule

from domain.constants import TICK_MS

logger = logging.getLogger(__name__)


class CancellationToken:
    """One-shot cancellation handle for a scheduled tick loop."""

    def __init__(self, on_cancel: Optional[Callable[[], None]] = None):
        self._cancelled = False
        self._on_cancel = on_cancel

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()


class TickScheduler:
    """Runs callbacks every `period_ms` milliseconds until their token is cancelled."""

    def __init__(self, period_ms: int = TICK_MS, scheduler: Optional[schedule.Scheduler] = None):
        if period_ms <= 0:
            raise ValueError(f"Tick period must be positive, got {period_ms} ms.")
        self.period_ms = period_ms
        self._scheduler = scheduler or schedule.Scheduler()

    @property
    def period_seconds(self) -> float:
        return self.period_ms / 1000

    @property
    def pending_jobs(self) -> int:
        """Number of tick loops currently scheduled."""
        return len(self._scheduler.jobs)

    def schedule_ticks(self, callback: Callable[[], None]) -> CancellationToken:
        """Call `callback` once per period until the returned token is cancelled."""
        job: Optional[schedule.Job] = None

        def _cancel_job() -> None:
            if job is not None:
                self._scheduler.cancel_job(job)

        token = CancellationToken(on_cancel=_cancel_job)
        job = self._scheduler.every(self.period_seconds).seconds.do(self._run_tick, callback, token)
        logger.debug("Scheduled tick loop every %s ms", self.period_ms)
        return token

    @staticmethod
    def _run_tick(callback: Callable[[], None], token: CancellationToken):
        if token.cancelled:
            return schedule.CancelJob
        callback()
        if token.cancelled:
            return schedule.CancelJob
        return None

    def run_pending(self) -> None:
        """Run the ticks that are due."""
        self._scheduler.run_pending()

    def step(self) -> None:
        """Run every scheduled tick once, regardless of when it is due."""
        self._scheduler.run_all(delay_seconds=0)

    def run_forever(self, until: Optional[Callable[[], bool]] = None) -> None:
        """
        Drive the scheduled ticks in real time.

        Returns once `until()` is true, or as soon as no tick loop is left.
        """
        while until is None or not until():
            idle = self._scheduler.idle_seconds
            if idle is None:
                logger.debug("No tick loop scheduled, leaving scheduler loop")
                return
            if idle > 0:
                time.sleep(min(idle, self.period_seconds))
            self._scheduler.run_pending()

    def clear(self) -> None:
        self._scheduler.clear()
