"""F6 / Shift+F6 landmark cycling.

Each page registers its ordered landmark regions with display names and an
optional skip predicate (e.g. "a modal is open"). The cursor starts before
the first landmark so the first forward cycle lands on index 0; it lives on
the cycler instance, so several independent cyclers can coexist.

On every cycle the landmark's first reachable descendant receives focus;
regions with nothing reachable are made programmatically focusable
(``tabindex="-1"``) and focused themselves. A transient
``landmark-focus-ring`` class marks the region until the indicator timer
fires, and the landmark name is announced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from focuskit.config.settings import FocusSettings
from focuskit.dom.events import DomEvent, KeyEvent
from focuskit.dom.node import Document, NodeHandle

from .announcer import Announcer
from .event_bus import EventBus, FocusEvent
from .reachability import first_reachable
from .scheduler import Scheduler
from .shortcut_registry import ShortcutRegistry

__all__ = ["Direction", "Landmark", "LandmarkCycler", "INDICATOR_CLASS"]

_log = logging.getLogger(__name__)

INDICATOR_CLASS = "landmark-focus-ring"


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class Landmark:
    element: Optional[NodeHandle]
    name: str


class LandmarkCycler:
    def __init__(
        self,
        landmarks: Sequence[Landmark],
        announcer: Announcer,
        scheduler: Scheduler,
        *,
        should_skip: Optional[Callable[[], bool]] = None,
        settings: Optional[FocusSettings] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._landmarks: List[Landmark] = list(landmarks)
        self._announcer = announcer
        self._scheduler = scheduler
        self._should_skip = should_skip
        self._settings = settings or FocusSettings()
        self._event_bus = event_bus
        self._index = -1
        self._document: Optional[Document] = None
        self._registry: Optional[ShortcutRegistry] = None

    @classmethod
    def from_pairs(
        cls,
        elements: Sequence[Optional[NodeHandle]],
        names: Sequence[str],
        announcer: Announcer,
        scheduler: Scheduler,
        **kwargs,
    ) -> "LandmarkCycler":
        if len(elements) != len(names):
            raise ValueError("landmark elements and names must have the same length")
        return cls([Landmark(e, n) for e, n in zip(elements, names)], announcer, scheduler, **kwargs)

    @property
    def index(self) -> int:
        return self._index

    @property
    def landmarks(self) -> List[Landmark]:
        return list(self._landmarks)

    def cycle(self, direction: Direction | str = Direction.FORWARD) -> Optional[Landmark]:
        """Move to the next/previous landmark; returns it, or None when suppressed."""
        if self._should_skip is not None and self._should_skip():
            _log.debug("landmark cycling suppressed")
            return None
        count = len(self._landmarks)
        if count == 0:
            return None
        if Direction(direction) is Direction.BACKWARD:
            self._index = count - 1 if self._index < 0 else (self._index - 1) % count
        else:
            self._index = (self._index + 1) % count
        landmark = self._landmarks[self._index]
        target = landmark.element
        if target is None:
            return None

        focusable = first_reachable(target)
        if focusable is not None:
            focusable.focus()
        else:
            target.set_attribute("tabindex", "-1")
            target.focus()

        target.add_class(INDICATOR_CLASS)
        self._scheduler.after(
            self._settings.landmark_indicator_ms, lambda: target.remove_class(INDICATOR_CLASS)
        )
        self._announcer.announce(f"{landmark.name} landmark")
        if self._event_bus is not None:
            self._event_bus.publish(
                FocusEvent.LANDMARK_FOCUSED, {"index": self._index, "name": landmark.name}
            )
        return landmark

    # Key binding ------------------------------------------------------
    def handle_key(self, event: DomEvent) -> None:
        if not isinstance(event, KeyEvent) or event.key != "F6":
            return
        event.prevent_default()
        self.cycle(Direction.BACKWARD if event.shift else Direction.FORWARD)

    def bind(self, document: Document, registry: Optional[ShortcutRegistry] = None) -> None:
        if self._document is not None:
            self.unbind()
        document.add_listener("keydown", self.handle_key)
        self._document = document
        self._registry = registry
        if registry is not None:
            registry.register("landmark.next", "F6", "Move to next landmark", "Navigation", owner=self)
            registry.register(
                "landmark.previous", "Shift+F6", "Move to previous landmark", "Navigation", owner=self
            )

    def unbind(self) -> None:
        if self._document is None:
            return
        self._document.remove_listener("keydown", self.handle_key)
        self._document = None
        if self._registry is not None:
            self._registry.release(self)
            self._registry = None
