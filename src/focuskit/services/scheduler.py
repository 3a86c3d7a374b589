"""Deferred callback scheduling.

Two kinds of deferral exist in the subsystem: "after the next paint" (live
region writes, initial focus once a container became visible) and "after a
fixed delay" (landmark indicator removal, scroll-settle re-positioning,
secondary spotlight re-positioning). Neither can be cancelled; scheduling
twice simply queues two independent callbacks.

``ManualScheduler`` runs on a virtual clock so tests advance time
deterministically. ``focuskit.qt.scheduler.QtScheduler`` drives the same
protocol from the Qt event loop.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Protocol

__all__ = ["Scheduler", "ManualScheduler", "ScheduledCall"]

_log = logging.getLogger(__name__)

Callback = Callable[[], None]


class Scheduler(Protocol):
    def after_paint(self, fn: Callback) -> None: ...  # pragma: no cover

    def after(self, ms: float, fn: Callback) -> None: ...  # pragma: no cover


@dataclass(order=True)
class ScheduledCall:
    due: float
    seq: int
    fn: Callback = field(compare=False)


class ManualScheduler:
    """Virtual-time scheduler.

    Paint callbacks run on ``flush_paint()`` (and before any timer when
    ``advance`` is called, mirroring a frame boundary preceding timers).
    Timers run in due-time order; ties keep scheduling order. Callbacks
    scheduled while flushing are picked up by the same flush when they are
    already due.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._seq = itertools.count()
        self._paint: List[Callback] = []
        self._timers: List[ScheduledCall] = []

    @property
    def now(self) -> float:
        return self._now

    def after_paint(self, fn: Callback) -> None:
        self._paint.append(fn)

    def after(self, ms: float, fn: Callback) -> None:
        heapq.heappush(self._timers, ScheduledCall(self._now + max(0.0, ms), next(self._seq), fn))

    def pending(self) -> int:
        return len(self._paint) + len(self._timers)

    def flush_paint(self) -> int:
        ran = 0
        while self._paint:
            batch, self._paint = self._paint, []
            for fn in batch:
                fn()
                ran += 1
        return ran

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms`` running everything that falls due."""
        target = self._now + ms
        ran = self.flush_paint()
        while self._timers and self._timers[0].due <= target:
            call = heapq.heappop(self._timers)
            self._now = call.due
            call.fn()
            ran += 1
            ran += self.flush_paint()
        self._now = target
        return ran

    def run_all(self, *, limit: int = 1000) -> int:
        """Drain paint callbacks and timers regardless of due time."""
        ran = 0
        while self.pending():
            if ran >= limit:
                _log.warning("run_all stopped after %d callbacks", limit)
                break
            ran += self.flush_paint()
            if self._timers:
                call = heapq.heappop(self._timers)
                self._now = max(self._now, call.due)
                call.fn()
                ran += 1
        return ran
