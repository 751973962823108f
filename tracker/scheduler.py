"""
tracker/scheduler.py

Cooperative job scheduler for the simulation timers.
- every(): periodic job, first run one period after registration
- call_later(): one-shot job
- advance(): virtual-time stepping for a ManualClock (deterministic tests)
- run(): asyncio loop that drives jobs in real time

Each job runs to completion before the next one starts. Jobs due at the
same instant run in registration order.
"""

import asyncio
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import structlog

logger = structlog.get_logger(__name__)

# Upper bound on a single sleep in run(), so jobs added mid-sleep are picked up
_MAX_SLEEP_S: float = 0.25


class ManualClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def set(self, value: float) -> None:
        if value < self.now:
            raise ValueError(f"clock cannot move backwards ({value} < {self.now})")
        self.now = value


@dataclass
class Job:
    name: str
    callback: Callable[[], object]
    due: float
    period: Optional[float] = None
    seq: int = 0
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._jobs: list[Job] = []
        self._seq = itertools.count()
        self._closed = False

    @property
    def clock(self) -> Callable[[], float]:
        return self._clock

    def now(self) -> float:
        return self._clock()

    @property
    def jobs(self) -> list[Job]:
        return [job for job in self._jobs if not job.cancelled]

    def every(
        self, period: float, callback: Callable[[], object], name: str = ""
    ) -> Job:
        """Register a periodic job."""
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        return self._add(callback, self.now() + period, period, name)

    def call_later(
        self, delay: float, callback: Callable[[], object], name: str = ""
    ) -> Job:
        """Register a job that runs once after delay seconds."""
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        return self._add(callback, self.now() + delay, None, name)

    def _add(
        self,
        callback: Callable[[], object],
        due: float,
        period: Optional[float],
        name: str,
    ) -> Job:
        job = Job(
            name=name or getattr(callback, "__name__", "job"),
            callback=callback,
            due=due,
            period=period,
            seq=next(self._seq),
        )
        self._jobs.append(job)
        return job

    def next_due(self) -> Optional[float]:
        pending = self.jobs
        if not pending:
            return None
        return min(job.due for job in pending)

    def run_due(self) -> int:
        """Run every job whose due time has passed. Returns the number run."""
        ran = 0
        while True:
            now = self.now()
            ready = [job for job in self.jobs if job.due <= now]
            if not ready:
                break
            job = min(ready, key=lambda j: (j.due, j.seq))
            if job.period is None:
                job.cancelled = True
            else:
                job.due += job.period
            self._execute(job)
            ran += 1
        self._jobs = self.jobs
        return ran

    def _execute(self, job: Job) -> None:
        try:
            job.callback()
        except Exception as exc:
            logger.error("scheduled_job_failed", job=job.name, error=str(exc))

    def advance(self, seconds: float) -> int:
        """Move a ManualClock forward, running jobs at their due instants."""
        if not isinstance(self._clock, ManualClock):
            raise TypeError("advance() requires a ManualClock")
        target = self._clock.now + seconds
        ran = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self._clock.set(max(due, self._clock.now))
            ran += self.run_due()
        self._clock.set(target)
        return ran

    async def run(self) -> None:
        """Drive jobs in real time until shutdown() is called."""
        logger.info("scheduler_started", jobs=len(self.jobs))
        while not self._closed:
            self.run_due()
            due = self.next_due()
            delay = _MAX_SLEEP_S if due is None else max(0.0, due - self.now())
            await asyncio.sleep(min(delay, _MAX_SLEEP_S))
        logger.info("scheduler_stopped")

    def shutdown(self) -> None:
        """Cancel every pending job and stop run()."""
        for job in self._jobs:
            job.cancel()
        self._jobs = []
        self._closed = True
