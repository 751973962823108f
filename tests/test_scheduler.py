"""
tests/test_scheduler.py

Unit tests for tracker/scheduler.py.
"""

import asyncio

import pytest

from tracker.scheduler import ManualClock, Scheduler


def test_periodic_job_runs_once_per_period() -> None:
    scheduler = Scheduler(ManualClock())
    calls: list[float] = []
    scheduler.every(2.0, lambda: calls.append(scheduler.now()))

    scheduler.advance(7.0)

    assert calls == [2.0, 4.0, 6.0]


def test_one_shot_runs_once() -> None:
    scheduler = Scheduler(ManualClock())
    calls: list[str] = []
    scheduler.call_later(1.5, lambda: calls.append("fired"))

    scheduler.advance(10.0)

    assert calls == ["fired"]
    assert scheduler.jobs == []


def test_cancelled_job_does_not_run() -> None:
    scheduler = Scheduler(ManualClock())
    calls: list[str] = []
    job = scheduler.call_later(1.0, lambda: calls.append("fired"))
    job.cancel()

    scheduler.advance(2.0)

    assert calls == []


def test_same_instant_jobs_run_in_registration_order() -> None:
    scheduler = Scheduler(ManualClock())
    calls: list[str] = []
    scheduler.call_later(1.0, lambda: calls.append("a"))
    scheduler.call_later(1.0, lambda: calls.append("b"))

    scheduler.advance(1.0)

    assert calls == ["a", "b"]


def test_failing_job_does_not_stop_others() -> None:
    scheduler = Scheduler(ManualClock())
    calls: list[str] = []

    def boom() -> None:
        raise RuntimeError("boom")

    scheduler.every(1.0, boom)
    scheduler.every(1.0, lambda: calls.append("ok"))

    scheduler.advance(3.0)

    assert calls == ["ok", "ok", "ok"]


def test_job_scheduled_from_callback_runs_in_window() -> None:
    scheduler = Scheduler(ManualClock())
    calls: list[float] = []
    scheduler.call_later(
        1.0,
        lambda: scheduler.call_later(1.0, lambda: calls.append(scheduler.now())),
    )

    scheduler.advance(5.0)

    assert calls == [2.0]


def test_advance_requires_manual_clock() -> None:
    with pytest.raises(TypeError):
        Scheduler().advance(1.0)


def test_manual_clock_never_goes_backwards() -> None:
    clock = ManualClock(5.0)
    with pytest.raises(ValueError):
        clock.set(4.0)


def test_invalid_period_rejected() -> None:
    with pytest.raises(ValueError):
        Scheduler(ManualClock()).every(0, lambda: None)


@pytest.mark.asyncio
async def test_run_drives_jobs_until_shutdown() -> None:
    scheduler = Scheduler()
    calls: list[str] = []
    scheduler.call_later(0.01, lambda: calls.append("fired"))

    runner = asyncio.create_task(scheduler.run())
    await asyncio.sleep(0.3)
    scheduler.shutdown()
    await asyncio.wait_for(runner, timeout=1.0)

    assert calls == ["fired"]
    assert scheduler.jobs == []
