"""Scheduler helper that owns debounce timers for presenter actions.

Presenters pass ``schedule``/``cancel`` callables into this class so timer
state is tracked in one place and canceled safely when the input changes
again, the collection changes, or the page unmounts. By default the asyncio
running loop provides the timers (``loop.call_later``).
"""

from __future__ import annotations


import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple


ScheduleFn = Callable[[int, Callable[[], None]], Any]
CancelFn = Callable[[Any], None]


@dataclass
class TimerHandle:
    """Timer token associated with a single debounce channel.

    Attributes:
        key: Channel key (for example ``search``).
        token: Token returned by the timer implementation.
    """
    key: str
    token: Any


def asyncio_timers() -> Tuple[ScheduleFn, CancelFn]:
    """Return schedule/cancel functions backed by the running event loop."""

    def schedule(delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)

    def cancel(token: asyncio.TimerHandle) -> None:
        token.cancel()

    return schedule, cancel


class DebounceScheduler:
    """Manage per-key trailing timers: a new schedule supersedes a pending one."""

    def __init__(self, schedule: Optional[ScheduleFn] = None, cancel: Optional[CancelFn] = None) -> None:
        """Store schedule/cancel functions and initialize handle registry.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function that cancels a token returned by ``schedule``.
        """
        if schedule is None or cancel is None:
            schedule, cancel = asyncio_timers()
        self._schedule = schedule
        self._cancel = cancel
        self._handles: Dict[str, TimerHandle] = {}

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Cancel any pending timer for ``key`` and start a new one."""
        delay = max(0, int(delay_ms))
        self.cancel(key)
        handle = TimerHandle(key=key, token=None)

        def fire() -> None:
            if self._handles.get(key) is not handle:
                return
            del self._handles[key]
            callback()

        handle.token = self._schedule(delay, fire)
        self._handles[key] = handle

    def cancel(self, key: str) -> None:
        """Cancel a pending timer for ``key``; no-op when none is pending."""
        handle = self._handles.pop(key, None)
        if not handle:
            return
        self._cancel(handle.token)

    def cancel_all(self) -> None:
        for key in list(self._handles.keys()):
            self.cancel(key)

    def pending(self, key: str) -> bool:
        return key in self._handles


__all__ = ["DebounceScheduler", "TimerHandle", "asyncio_timers"]
