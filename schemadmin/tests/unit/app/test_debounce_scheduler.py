from __future__ import annotations

import asyncio

from schemadmin.app.debounce_scheduler import DebounceScheduler
from schemadmin.tests.unit.app.helpers import ManualTimers, run


def test_schedule_replaces_pending_timer_for_same_key() -> None:
    timers = ManualTimers()
    scheduler = timers.scheduler()
    calls = []

    scheduler.schedule("search", 500, lambda: calls.append("first"))
    scheduler.schedule("search", 500, lambda: calls.append("second"))
    scheduler.schedule("other", 10, lambda: calls.append("other"))

    assert timers.cancelled == [1]
    assert scheduler.pending("search")
    assert timers.fire_all() == 2
    assert calls == ["second", "other"]
    assert not scheduler.pending("search")


def test_cancel_and_cancel_all() -> None:
    timers = ManualTimers()
    scheduler = timers.scheduler()
    calls = []
    scheduler.schedule("a", 5, lambda: calls.append("a"))
    scheduler.schedule("b", 5, lambda: calls.append("b"))

    scheduler.cancel("a")
    scheduler.cancel("a")
    scheduler.cancel_all()

    assert timers.fire_all() == 0
    assert calls == []
    assert sorted(timers.cancelled) == [1, 2]


def test_negative_delay_is_clamped() -> None:
    timers = ManualTimers()
    timers.scheduler().schedule("k", -20, lambda: None)
    assert [delay for delay, _ in timers.pending.values()] == [0]


def test_event_loop_timers_fire_once_after_quiet_period() -> None:
    async def scenario():
        scheduler = DebounceScheduler()
        calls = []
        scheduler.schedule("k", 10, lambda: calls.append(1))
        scheduler.schedule("k", 10, lambda: calls.append(2))
        await asyncio.sleep(0.05)
        return calls

    assert run(scenario()) == [2]
