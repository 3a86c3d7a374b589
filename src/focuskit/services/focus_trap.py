"""Focus trap: confine Tab / Shift+Tab to a container.

``activate`` installs one keydown listener on the container (replacing any
previous one, so activation is idempotent). On each Tab press the reachable
elements are recomputed; when focus sits on the last element and the user
moves forward, focus wraps to the first, and the reverse for Shift+Tab from
the first. Every other Tab press is left to native focus movement.

A container without reachable elements is never locked: the listener stays
installed but does nothing until content appears.

Callers pair ``activate`` with ``deactivate`` on close and restore focus to
whatever opened the container themselves.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from focuskit.dom.events import DomEvent, KeyEvent
from focuskit.dom.node import Document, NodeHandle

from .event_bus import EventBus, FocusEvent
from .reachability import find_reachable
from .service_locator import ServiceKey, services

__all__ = ["FocusTrapManager", "trap_focus", "release_focus", "get_focus_trap_manager"]

_log = logging.getLogger(__name__)


class FocusTrapManager:
    def __init__(self, document: Document, *, event_bus: Optional[EventBus] = None) -> None:
        self._document = document
        self._event_bus = event_bus
        self._handlers: Dict[NodeHandle, Callable[[DomEvent], None]] = {}

    def activate(self, container: NodeHandle) -> None:
        self.deactivate(container)

        def handler(event: DomEvent) -> None:
            if isinstance(event, KeyEvent) and event.key == "Tab":
                self._on_tab(container, event)

        container.add_listener("keydown", handler)
        self._handlers[container] = handler
        _log.debug("focus trap activated on %r", container)
        self._publish(FocusEvent.FOCUS_TRAPPED, container)

    def deactivate(self, container: NodeHandle) -> None:
        handler = self._handlers.pop(container, None)
        if handler is None:
            return
        container.remove_listener("keydown", handler)
        _log.debug("focus trap released on %r", container)
        self._publish(FocusEvent.FOCUS_RELEASED, container)

    def is_active(self, container: NodeHandle) -> bool:
        return container in self._handlers

    def active_containers(self) -> List[NodeHandle]:
        return list(self._handlers)

    def _on_tab(self, container: NodeHandle, event: KeyEvent) -> None:
        current = find_reachable(container)
        if not current:
            return
        first, last = current[0], current[-1]
        active = self._document.active_element
        if event.shift:
            if active == first:
                event.prevent_default()
                last.focus()
                self._publish(FocusEvent.FOCUS_WRAPPED, container, direction="backward")
        elif active == last:
            event.prevent_default()
            first.focus()
            self._publish(FocusEvent.FOCUS_WRAPPED, container, direction="forward")

    def _publish(self, name: FocusEvent, container: NodeHandle, **extra) -> None:
        if self._event_bus is None:
            return
        payload = {"container": container.node_id}
        payload.update(extra)
        self._event_bus.publish(name, payload)


def get_focus_trap_manager() -> FocusTrapManager:
    return services.require(ServiceKey.FOCUS_TRAPS, FocusTrapManager)


def trap_focus(container: NodeHandle) -> None:
    get_focus_trap_manager().activate(container)


def release_focus(container: NodeHandle) -> None:
    get_focus_trap_manager().deactivate(container)
