"""Live region announcer.

Assistive technology only re-announces a live region when its text content
changes. ``announce`` therefore clears the region synchronously and writes
the message after the next paint, so repeating the same text still yields
two mutations (clear, write, clear, write).

There is no queue. A second message issued before the first write runs
schedules its own write; whichever write runs last wins.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional

from focuskit.dom.node import LiveRegion

from .event_bus import EventBus, FocusEvent
from .scheduler import Scheduler
from .service_locator import ServiceKey, services

__all__ = ["Announcer", "announce", "get_announcer"]

_log = logging.getLogger(__name__)


class Announcer:
    def __init__(
        self,
        live_region: Optional[LiveRegion],
        scheduler: Scheduler,
        *,
        event_bus: Optional[EventBus] = None,
        history: int = 50,
    ) -> None:
        self._region = live_region
        self._scheduler = scheduler
        self._event_bus = event_bus
        self._history: Deque[str] = deque(maxlen=history)

    @property
    def live_region(self) -> Optional[LiveRegion]:
        return self._region

    def announce(self, message: str) -> None:
        region = self._region
        if region is None:
            _log.debug("no live region; dropped announcement %r", message)
            return
        region.set_text("")

        def _write() -> None:
            region.set_text(message)

        self._scheduler.after_paint(_write)
        self._history.append(message)
        if self._event_bus is not None:
            self._event_bus.publish(FocusEvent.ANNOUNCEMENT, {"message": message})

    def recent(self) -> List[str]:
        """Messages issued so far (most recent last)."""
        return list(self._history)


def get_announcer() -> Announcer:
    return services.require(ServiceKey.ANNOUNCER, Announcer)


def announce(message: str) -> None:
    """Collaborator entry point: announce through the registered announcer."""
    svc = services.try_get(ServiceKey.ANNOUNCER)
    if svc is None:
        _log.debug("announcer not registered; dropped %r", message)
        return
    svc.announce(message)
