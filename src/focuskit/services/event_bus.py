"""Synchronous publish/subscribe for focus subsystem notifications.

The trap manager, landmark cycler, announcer and walkthrough engine publish
``FocusEvent`` notifications so debug panels and page collaborators can
observe focus movement without reaching into component state.

Goals:
 - No Qt dependency
 - Error isolation: one failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions and unsubscribe handles
 - Optional bounded trace of recent events
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol, Tuple

__all__ = [
    "FocusEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
    "TraceEntry",
]


class FocusEvent(str, Enum):
    ANNOUNCEMENT = "announcement"
    FOCUS_TRAPPED = "focus_trapped"
    FOCUS_RELEASED = "focus_released"
    FOCUS_WRAPPED = "focus_wrapped"
    LANDMARK_FOCUSED = "landmark_focused"
    TAB_SWITCHED = "tab_switched"
    FLOATING_POSITIONED = "floating_positioned"
    TOUR_STARTED = "tour_started"
    TOUR_STEP_CHANGED = "tour_step_changed"
    TOUR_ENDED = "tour_ended"
    LOG_RECORD_ADDED = "log_record_added"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass(frozen=True)
class TraceEntry:
    name: str
    timestamp: float
    summary: str


def _key(name: str | FocusEvent) -> str:
    return name.value if isinstance(name, FocusEvent) else name


class EventBus:
    """Synchronous dispatcher.

    Handlers are invoked outside the lock (snapshot first) so a handler may
    subscribe or unsubscribe without deadlocking. Handler exceptions are
    stored in ``errors`` instead of propagating to the publisher.
    """

    DEFAULT_TRACE_CAPACITY = 50

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[Tuple[Event, BaseException]] = []
        self._tracing_enabled = False
        self._traces: Deque[TraceEntry] = deque(maxlen=self.DEFAULT_TRACE_CAPACITY)

    def subscribe(
        self, name: str | FocusEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket and sub in bucket:
                bucket.remove(sub)
                if not bucket:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | FocusEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
            if self._tracing_enabled:
                text = "-" if payload is None else str(payload)
                summary = text if len(text) <= 40 else text[:37] + "..."
                self._traces.append(TraceEntry(key, evt.timestamp, summary))
        spent: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            if sub.once:
                spent.append(sub)
        for sub in spent:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | FocusEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> List[Tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)

    # Tracing ------------------------------------------------------------
    def enable_tracing(self, enabled: bool = True, *, capacity: int | None = None) -> None:
        with self._lock:
            self._tracing_enabled = enabled
            if capacity is not None and capacity != self._traces.maxlen:
                self._traces = deque(self._traces, maxlen=capacity)

    def recent_traces(self) -> List[TraceEntry]:
        with self._lock:
            return list(self._traces)
