"""Tab list controller (drawer tabs).

Tabs are ``[role="tab"]`` buttons with ids ``tab-btn-<name>``; panels carry
ids ``tab-<name>``. ``switch_tab(name)`` keeps ``aria-selected``, the roving
``tabindex`` and the panels' ``aria-hidden`` consistent, which is what the
reachability scanner relies on to skip inactive panels. Arrow keys wrap,
Home/End jump to the ends.

The controller is handed to drawer-opening collaborators, which call
``switch_tab`` to reset the drawer to its first tab.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from focuskit.dom.events import DomEvent, KeyEvent
from focuskit.dom.node import Document, NodeHandle

from .announcer import Announcer
from .event_bus import EventBus, FocusEvent

__all__ = ["TabListController"]

_log = logging.getLogger(__name__)

_TAB_PREFIX = "tab-btn-"
_PANEL_PREFIX = "tab-"


def _title(name: str) -> str:
    return name[:1].upper() + name[1:]


def _strip(value: Optional[str], prefix: str) -> str:
    value = value or ""
    return value[len(prefix):] if value.startswith(prefix) else value


class TabListController:
    def __init__(
        self,
        document: Document,
        tab_list_selector: str,
        announcer: Announcer,
        *,
        panel_selector: str = ".drawer__tab-panel",
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._document = document
        self._announcer = announcer
        self._panel_selector = panel_selector
        self._event_bus = event_bus
        self._tab_list = document.query(tab_list_selector)
        self._tabs: List[NodeHandle] = []
        if self._tab_list is None:
            _log.debug("tab list %r not found; switch_tab is a no-op", tab_list_selector)
            return
        self._tabs = self._tab_list.select('[role="tab"]')
        for tab in self._tabs:
            tab.add_listener("click", self._on_click)
            tab.add_listener("keydown", self._on_keydown)

    @property
    def available(self) -> bool:
        return self._tab_list is not None

    def tab_names(self) -> List[str]:
        return [_strip(t.node_id, _TAB_PREFIX) for t in self._tabs]

    def selected(self) -> Optional[str]:
        for tab in self._tabs:
            if tab.get_attribute("aria-selected") == "true":
                return _strip(tab.node_id, _TAB_PREFIX)
        return None

    def switch_tab(self, name: str) -> None:
        if self._tab_list is None:
            return
        for tab in self._tabs:
            selected = _strip(tab.node_id, _TAB_PREFIX) == name
            tab.set_attribute("aria-selected", "true" if selected else "false")
            tab.set_attribute("tabindex", "0" if selected else "-1")
        for panel in self._document.query_all(self._panel_selector):
            shown = _strip(panel.node_id, _PANEL_PREFIX) == name
            panel.set_attribute("aria-hidden", "false" if shown else "true")
        if self._event_bus is not None:
            self._event_bus.publish(FocusEvent.TAB_SWITCHED, {"tab": name})

    # Handlers ---------------------------------------------------------
    def _on_click(self, event: DomEvent) -> None:
        tab = event.current_target
        if tab is None:
            return
        name = _strip(tab.node_id, _TAB_PREFIX)
        self.switch_tab(name)
        self._announcer.announce(f"{_title(name)} tab selected")

    def _on_keydown(self, event: DomEvent) -> None:
        if not isinstance(event, KeyEvent) or event.current_target not in self._tabs:
            return
        idx = self._tabs.index(event.current_target)
        count = len(self._tabs)
        target: Optional[NodeHandle] = None
        if event.key == "ArrowRight":
            target = self._tabs[(idx + 1) % count]
        elif event.key == "ArrowLeft":
            target = self._tabs[(idx - 1 + count) % count]
        elif event.key == "Home":
            target = self._tabs[0]
        elif event.key == "End":
            target = self._tabs[-1]
        if target is None:
            return
        event.prevent_default()
        name = _strip(target.node_id, _TAB_PREFIX)
        self.switch_tab(name)
        target.focus()
        self._announcer.announce(f"{_title(name)} tab")
