"""Guided walkthrough engine.

Sequences the steps of a ``WalkthroughDefinition`` over arbitrary page
targets. The engine owns the only mutable tour state (``active`` and the
current step index) so several independent tours can live on one page.

State machine::

    Inactive --start()--> Active(0)
    Active(i) --next()--> Active(i + 1)        (i < last)
    Active(last) --next()--> Inactive
    Active(i) --previous()--> Active(i - 1)    (i > 0; no-op at 0)
    Active(i) --end()--> Inactive

Rendering a step runs the previous step's ``on_leave`` before the new
step's ``on_enter``; ``end`` runs the current ``on_leave``. Hook failures
are logged and kept in ``errors`` so a broken hook never leaves the overlay
stuck open. A step whose target selector resolves to nothing is not shown
and the current index is left alone.

Page controls are looked up by id (see ``WalkthroughElements``); any text
slot that is missing from the page is simply not written.

While a tour is open the page body gets ``overflow: hidden`` (unless
``lock_scroll=False``); the previous inline value comes back on end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from focuskit.config.settings import FocusSettings
from focuskit.design.placement import needs_scroll
from focuskit.design.walkthrough_steps import WalkthroughDefinition, WalkthroughStep
from focuskit.dom.events import DomEvent, KeyEvent
from focuskit.dom.geometry import Rect, Size
from focuskit.dom.node import Document, NodeHandle

from .announcer import Announcer
from .event_bus import EventBus, FocusEvent
from .focus_trap import FocusTrapManager
from .positioner import FloatingPositioner
from .scheduler import Scheduler

__all__ = ["WalkthroughElements", "WalkthroughEngine", "HookError"]

_log = logging.getLogger(__name__)

DOT_CLASS = "wt-card__dot"
DOT_ACTIVE_CLASS = "wt-card__dot--active"
CARD_CLASS_PREFIX = "wt-card"
_PARKED = "-9999px"


@dataclass(frozen=True)
class WalkthroughElements:
    """Element ids of the tour overlay and card controls."""

    overlay: str = "wt-overlay"
    spotlight: str = "wt-spotlight"
    card: str = "wt-card"
    launcher: str = "wt-tour-btn"
    close: str = "wt-close"
    prev: str = "wt-prev"
    next: str = "wt-next"
    counter: str = "wt-step-counter"
    wcag: str = "wt-wcag-tag"
    title: str = "wt-title"
    description: str = "wt-desc"
    impact: str = "wt-impact"
    screen_reader: str = "wt-sr-output"
    progress: str = "wt-progress"


@dataclass(frozen=True)
class HookError:
    step_index: int
    hook: str  # "on_enter" | "on_leave"
    error: BaseException


class WalkthroughEngine:
    def __init__(
        self,
        document: Document,
        definition: WalkthroughDefinition,
        announcer: Announcer,
        traps: FocusTrapManager,
        positioner: FloatingPositioner,
        scheduler: Scheduler,
        *,
        elements: Optional[WalkthroughElements] = None,
        settings: Optional[FocusSettings] = None,
        on_start: Optional[Callable[[], None]] = None,
        lock_scroll: bool = True,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._document = document
        self._definition = definition
        self._announcer = announcer
        self._traps = traps
        self._positioner = positioner
        self._scheduler = scheduler
        self._ids = elements or WalkthroughElements()
        self._settings = settings or positioner.settings
        self._on_start = on_start
        self._lock_scroll = lock_scroll
        self._saved_overflow: Optional[str] = None
        self._scroll_locked = False
        self._event_bus = event_bus
        self._active = False
        self._index: Optional[int] = None
        self._bindings: List[Tuple[NodeHandle, str, Callable[[DomEvent], None]]] = []
        self._bound = False
        self.errors: List[HookError] = []

    # State ------------------------------------------------------------
    @property
    def definition(self) -> WalkthroughDefinition:
        return self._definition

    @property
    def active(self) -> bool:
        return self._active

    @property
    def current_index(self) -> Optional[int]:
        return self._index if self._active else None

    @property
    def current_step(self) -> Optional[WalkthroughStep]:
        idx = self.current_index
        return None if idx is None else self._definition.steps[idx]

    @property
    def available(self) -> bool:
        return self._el(self._ids.overlay) is not None and self._el(self._ids.card) is not None

    def _el(self, element_id: str) -> Optional[NodeHandle]:
        return self._document.get_by_id(element_id)

    # Transitions ------------------------------------------------------
    def start(self) -> None:
        if self._active:
            return
        if not self.available:
            _log.warning("walkthrough %r: overlay or card missing, not starting", self._definition.id)
            return
        if self._on_start is not None:
            self._on_start()
        self._active = True
        self._index = None
        overlay = self._el(self._ids.overlay)
        overlay.set_attribute("aria-hidden", "false")
        overlay.set_style("display", "block")
        self._set_scroll_lock(True)
        if not self.render_step(0):
            _log.warning("walkthrough %r: first step target missing, not starting", self._definition.id)
            self._hide_overlay()
            self._active = False
            return
        card = self._el(self._ids.card)
        self._traps.activate(card)
        close = self._el(self._ids.close)
        if close is not None:
            self._scheduler.after_paint(close.focus)
        _log.info("walkthrough %r started", self._definition.id)
        self._publish(FocusEvent.TOUR_STARTED, {"walkthrough": self._definition.id})

    def render_step(self, index: int) -> bool:
        """Show step ``index``; returns False when nothing was rendered."""
        steps = self._definition.steps
        if not 0 <= index < len(steps):
            _log.warning("walkthrough %r: no step %d", self._definition.id, index)
            return False
        step = steps[index]
        target = self._document.query(step.target)
        if target is None:
            _log.info("walkthrough %r: step %d target %r not found, skipped", self._definition.id, index, step.target)
            return False

        if self._active and self._index is not None:
            self._run_hook(self._index, "on_leave")
        self._index = index
        self._run_hook(index, "on_enter")

        total = len(steps)
        self._write(self._ids.counter, f"{index + 1} / {total}")
        self._write(self._ids.wcag, step.wcag)
        self._write(self._ids.title, step.title)
        self._write(self._ids.description, step.description)
        self._write(self._ids.impact, step.impact)
        self._write(self._ids.screen_reader, step.screen_reader_preview)

        prev_btn = self._el(self._ids.prev)
        if prev_btn is not None:
            prev_btn.set_style("display", "none" if index == 0 else None)
        next_btn = self._el(self._ids.next)
        if next_btn is not None:
            next_btn.set_text("Close" if index == total - 1 else "Next")

        progress = self._el(self._ids.progress)
        if progress is not None:
            progress.clear_children()
            for i in range(total):
                classes = [DOT_CLASS, DOT_ACTIVE_CLASS] if i == index else [DOT_CLASS]
                progress.append_child("span", classes)

        self.position(target)

        if step.spotlight_target:
            selector = step.spotlight_target

            def _reposition() -> None:
                if not self._active or self._index != index:
                    return
                spot = self._document.query(selector)
                if spot is not None:
                    self.position(spot)

            self._scheduler.after(self._settings.spotlight_delay_ms, _reposition)

        self._announcer.announce(f"Step {index + 1} of {total}: {step.title}")
        self._publish(FocusEvent.TOUR_STEP_CHANGED, {"walkthrough": self._definition.id, "index": index})
        return True

    def next(self) -> None:
        if not self._active or self._index is None:
            return
        if self._index < len(self._definition.steps) - 1:
            self.render_step(self._index + 1)
        else:
            self.end()

    def previous(self) -> None:
        if not self._active or self._index is None:
            return
        if self._index > 0:
            self.render_step(self._index - 1)

    def end(self) -> None:
        if not self._active:
            return
        if self._index is not None:
            self._run_hook(self._index, "on_leave")
        self._active = False
        self._index = None
        self._hide_overlay()
        card = self._el(self._ids.card)
        if card is not None:
            self._traps.deactivate(card)
        launcher = self._el(self._ids.launcher)
        if launcher is not None:
            launcher.focus()
        self._announcer.announce("Tour ended")
        _log.info("walkthrough %r ended", self._definition.id)
        self._publish(FocusEvent.TOUR_ENDED, {"walkthrough": self._definition.id})

    def _hide_overlay(self) -> None:
        overlay = self._el(self._ids.overlay)
        if overlay is not None:
            overlay.set_attribute("aria-hidden", "true")
            overlay.set_style("display", "none")
        self._set_scroll_lock(False)

    def _set_scroll_lock(self, locked: bool) -> None:
        """Hide page overflow while the tour is open; restore the previous value after."""
        if not self._lock_scroll or locked == self._scroll_locked:
            return
        body = self._document.query("body")
        if body is None:
            return
        if locked:
            self._saved_overflow = body.style("overflow")
            body.set_style("overflow", "hidden")
        else:
            body.set_style("overflow", self._saved_overflow)
            self._saved_overflow = None
        self._scroll_locked = locked

    # Layout -----------------------------------------------------------
    def position(self, target: NodeHandle) -> None:
        """Place the spotlight over ``target`` and the card beside it."""
        rect = target.rect()
        viewport = self._document.viewport
        if rect.is_outside(viewport):
            self._park_spotlight()
            card = self._el(self._ids.card)
            if card is not None:
                self._positioner.center(card, self._card_size(card), class_prefix=CARD_CLASS_PREFIX)
            return
        if needs_scroll(rect, viewport, self._settings.scroll_edge_threshold):
            self._document.scroll_into_view(target, behavior=self._settings.scroll_behavior, block="center")

            scheduled_for = self._index

            def _settle() -> None:
                if self._active and self._index == scheduled_for:
                    self._place(target.rect())

            self._scheduler.after(self._settings.scroll_settle_ms, _settle)
            rect = target.rect()
        self._place(rect)

    def _place(self, rect: Rect) -> None:
        spotlight = self._el(self._ids.spotlight)
        if spotlight is not None:
            box = rect.padded(self._settings.spotlight_pad)
            spotlight.set_style("top", f"{box.top + self._document.scroll_y:g}px")
            spotlight.set_style("left", f"{box.left:g}px")
            spotlight.set_style("width", f"{box.width:g}px")
            spotlight.set_style("height", f"{box.height:g}px")
        card = self._el(self._ids.card)
        if card is None:
            return
        placement = self._positioner.compute(
            rect,
            self._card_size(card),
            gap=self._settings.card_gap,
            margin=self._settings.card_margin,
        )
        self._positioner.apply(card, placement, class_prefix=CARD_CLASS_PREFIX)

    def _park_spotlight(self) -> None:
        spotlight = self._el(self._ids.spotlight)
        if spotlight is None:
            return
        spotlight.set_style("top", _PARKED)
        spotlight.set_style("left", _PARKED)
        spotlight.set_style("width", "0px")
        spotlight.set_style("height", "0px")

    def _card_size(self, card: NodeHandle) -> Size:
        s = self._settings
        width = min(s.card_max_width, self._document.viewport.width - 2 * s.card_margin)
        card.set_style("width", f"{width:g}px")
        height = self._positioner.measure(card).height or s.card_fallback_height
        return Size(width, height)

    # Hooks ------------------------------------------------------------
    def _run_hook(self, index: int, name: str) -> None:
        hook = getattr(self._definition.steps[index].hooks, name)
        if hook is None:
            return
        try:
            hook()
        except Exception as exc:  # noqa: BLE001 - hooks are page code
            _log.exception("walkthrough %r step %d %s failed", self._definition.id, index, name)
            self.errors.append(HookError(index, name, exc))

    def _write(self, element_id: str, value: str) -> None:
        node = self._el(element_id)
        if node is not None:
            node.set_text(value)

    def _publish(self, name: FocusEvent, payload: dict) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(name, payload)

    # Triggers ---------------------------------------------------------
    def bind(self) -> None:
        """Wire launcher, card buttons, overlay, navigation keys and resize."""
        if self._bound:
            return
        ids = self._ids
        for element_id, handler in (
            (ids.launcher, lambda _e: self.start()),
            (ids.close, lambda _e: self.end()),
            (ids.next, lambda _e: self.next()),
            (ids.prev, lambda _e: self.previous()),
            (ids.overlay, self._on_overlay_click),
        ):
            node = self._el(element_id)
            if node is None:
                continue
            node.add_listener("click", handler)
            self._bindings.append((node, "click", handler))
        self._document.add_listener("keydown", self._on_keydown, capture=True)
        self._document.add_listener("resize", self._on_resize)
        self._bound = True

    def unbind(self) -> None:
        if not self._bound:
            return
        for node, event_type, handler in self._bindings:
            node.remove_listener(event_type, handler)
        self._bindings.clear()
        self._document.remove_listener("keydown", self._on_keydown, capture=True)
        self._document.remove_listener("resize", self._on_resize)
        self._bound = False

    def _on_overlay_click(self, event: DomEvent) -> None:
        if event.target is not None and event.target == self._el(self._ids.overlay):
            self.end()

    def _on_keydown(self, event: DomEvent) -> None:
        if not self._active or not isinstance(event, KeyEvent) or self._index is None:
            return
        if event.key == "Escape":
            event.prevent_default()
            event.stop_propagation()
            self.end()
        elif event.key == "ArrowRight":
            event.prevent_default()
            if self._index < len(self._definition.steps) - 1:
                self.render_step(self._index + 1)
        elif event.key == "ArrowLeft":
            event.prevent_default()
            if self._index > 0:
                self.render_step(self._index - 1)

    def _on_resize(self, _event: DomEvent) -> None:
        step = self.current_step
        if step is None:
            return
        target = self._document.query(step.target)
        if target is not None:
            self.position(target)
