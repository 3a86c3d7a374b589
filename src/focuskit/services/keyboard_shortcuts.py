"""Page-wide keyboard shortcuts: search focus and the keyboard help bar.

 - Ctrl+K / Meta+K focuses the search input.
 - ``?`` toggles the keyboard help bar, unless the user is typing in a form
   field. Opening it is announced.
 - The help bar's close button hides it.

Landmark cycling (F6) is bound by ``LandmarkCycler`` itself.
"""

from __future__ import annotations

import logging
from typing import Optional

from focuskit.dom.events import DomEvent, KeyEvent
from focuskit.dom.node import Document

from .announcer import Announcer
from .shortcut_registry import ShortcutRegistry

__all__ = ["KeyboardShortcuts"]

_log = logging.getLogger(__name__)

_TYPING_TAGS = {"input", "textarea", "select"}


class KeyboardShortcuts:
    def __init__(
        self,
        document: Document,
        announcer: Announcer,
        *,
        registry: Optional[ShortcutRegistry] = None,
        search_input_id: str = "search-input",
        help_bar_id: str = "kbd-help-bar",
        help_close_id: str = "kbd-help-close",
    ) -> None:
        self._document = document
        self._announcer = announcer
        self._registry = registry or ShortcutRegistry()
        self._search_input_id = search_input_id
        self._help_bar_id = help_bar_id
        self._help_close_id = help_close_id
        self._bound = False

    @property
    def registry(self) -> ShortcutRegistry:
        return self._registry

    def bind(self) -> None:
        if self._bound:
            return
        self._document.add_listener("keydown", self._on_keydown)
        close = self._document.get_by_id(self._help_close_id)
        if close is not None:
            close.add_listener("click", self._on_close_click)
        self._registry.register("search.focus", "Ctrl+K", "Focus search", "Navigation", owner=self)
        self._registry.register("help.toggle", "?", "Toggle keyboard shortcuts bar", "Help", owner=self)
        self._bound = True

    def unbind(self) -> None:
        if not self._bound:
            return
        self._document.remove_listener("keydown", self._on_keydown)
        close = self._document.get_by_id(self._help_close_id)
        if close is not None:
            close.remove_listener("click", self._on_close_click)
        self._registry.release(self)
        self._bound = False

    # Handlers ---------------------------------------------------------
    def _on_keydown(self, event: DomEvent) -> None:
        if not isinstance(event, KeyEvent):
            return
        if (event.ctrl or event.meta) and event.key.lower() == "k":
            event.prevent_default()
            search = self._document.get_by_id(self._search_input_id)
            if search is not None:
                search.focus()
            return
        if event.key == "?":
            active = self._document.active_element
            if active is not None and active.tag_name in _TYPING_TAGS:
                return
            event.prevent_default()
            self.toggle_help()

    def _on_close_click(self, _event: DomEvent) -> None:
        bar = self._document.get_by_id(self._help_bar_id)
        if bar is not None:
            bar.set_attribute("aria-hidden", "true")

    def toggle_help(self) -> bool:
        """Flip the help bar; returns True when it is now open."""
        bar = self._document.get_by_id(self._help_bar_id)
        if bar is None:
            return False
        is_open = bar.get_attribute("aria-hidden") == "false"
        bar.set_attribute("aria-hidden", "true" if is_open else "false")
        if not is_open:
            self._announcer.announce("Keyboard shortcuts bar opened")
        _log.debug("keyboard help bar %s", "closed" if is_open else "opened")
        return not is_open
