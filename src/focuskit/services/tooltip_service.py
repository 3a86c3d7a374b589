"""Tooltip binding.

Every ``.tooltip`` inside a ``.has-tooltip`` trigger is re-positioned when
the trigger is hovered or receives focus, so the tooltip stays inside the
viewport whichever way it has to flip. Tooltips without a trigger are left
alone.
"""

from __future__ import annotations

from typing import Callable, List, Tuple

from focuskit.dom.events import DomEvent
from focuskit.dom.node import Document, NodeHandle

from .positioner import FloatingPositioner

__all__ = ["TooltipBinder"]

_Binding = Tuple[NodeHandle, Callable[[DomEvent], None]]


class TooltipBinder:
    def __init__(
        self,
        document: Document,
        positioner: FloatingPositioner,
        *,
        tooltip_selector: str = ".tooltip",
        trigger_selector: str = ".has-tooltip",
    ) -> None:
        self._document = document
        self._positioner = positioner
        self._tooltip_selector = tooltip_selector
        self._trigger_selector = trigger_selector
        self._bindings: List[_Binding] = []

    def bind(self) -> int:
        """Attach listeners; returns the number of tooltips bound."""
        self.unbind()
        for tooltip in self._document.query_all(self._tooltip_selector):
            trigger = tooltip.closest(self._trigger_selector)
            if trigger is None:
                continue
            handler = self._make_handler(trigger, tooltip)
            trigger.add_listener("mouseenter", handler)
            trigger.add_listener("focusin", handler)
            self._bindings.append((trigger, handler))
        return len(self._bindings)

    def unbind(self) -> None:
        for trigger, handler in self._bindings:
            trigger.remove_listener("mouseenter", handler)
            trigger.remove_listener("focusin", handler)
        self._bindings.clear()

    def _make_handler(self, trigger: NodeHandle, tooltip: NodeHandle) -> Callable[[DomEvent], None]:
        def handler(_event: DomEvent) -> None:
            self._positioner.position_rect(trigger.rect(), tooltip)

        return handler
