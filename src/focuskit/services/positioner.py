"""Floating element positioner (layout side effects).

Wraps the pure ``focuskit.design.placement`` algorithm with what a real page
needs around it:

 - a measurement pass: the floating element is made renderable but
   invisible, measured, and its previous inline styles restored;
 - scroll-into-view for references hugging the top or bottom edge, followed
   by a deferred re-placement once the smooth scroll has settled;
 - writing the decision back: ``top``/``left`` inline styles, a
   ``tooltip--<side>`` class, ``data-placement`` and ``--arrow-offset``.

Placement is never cached; viewport size and target position change between
calls.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from focuskit.config.settings import FocusSettings
from focuskit.design.placement import SIDES, Placement, needs_scroll, place, place_centered
from focuskit.dom.geometry import Rect, Size
from focuskit.dom.node import Document, NodeHandle

from .event_bus import EventBus, FocusEvent
from .scheduler import Scheduler
from .service_locator import ServiceKey, services

__all__ = ["FloatingPositioner", "position_floating_element", "get_positioner"]

_log = logging.getLogger(__name__)

_MEASURE_STYLES = (("visibility", "hidden"), ("opacity", "0"), ("display", "block"))


class FloatingPositioner:
    def __init__(
        self,
        document: Document,
        scheduler: Scheduler,
        settings: Optional[FocusSettings] = None,
        *,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._document = document
        self._scheduler = scheduler
        self._settings = settings or FocusSettings()
        self._event_bus = event_bus

    @property
    def settings(self) -> FocusSettings:
        return self._settings

    # Measurement ------------------------------------------------------
    def measure(self, floating: NodeHandle) -> Size:
        """Natural size of ``floating``; ``Size(0, 0)`` when it has no layout."""
        previous = [(name, floating.style(name)) for name, _ in _MEASURE_STYLES]
        for name, value in _MEASURE_STYLES:
            floating.set_style(name, value)
        try:
            box = floating.rect()
        finally:
            for name, value in previous:
                floating.set_style(name, value)
        if box.is_empty:
            return Size(0, 0)
        return box.size

    # Placement --------------------------------------------------------
    def compute(
        self,
        reference: Rect,
        size: Size,
        *,
        gap: Optional[float] = None,
        margin: Optional[float] = None,
    ) -> Placement:
        return place(
            reference,
            size,
            self._document.viewport,
            gap=self._settings.tooltip_gap if gap is None else gap,
            margin=self._settings.tooltip_margin if margin is None else margin,
        )

    def position(
        self,
        reference: NodeHandle,
        floating: NodeHandle,
        *,
        gap: Optional[float] = None,
        margin: Optional[float] = None,
        on_settled: Optional[Callable[[Placement], None]] = None,
    ) -> Placement:
        """Place ``floating`` next to ``reference`` and apply the result.

        When the reference is close to a vertical viewport edge it is first
        scrolled into view; the returned placement is the immediate one and
        a second placement is applied after ``scroll_settle_ms`` (passed to
        ``on_settled`` when given). The settle pass never scrolls again.
        """
        rect = reference.rect()
        viewport = self._document.viewport
        if not rect.is_outside(viewport) and needs_scroll(
            rect, viewport, self._settings.scroll_edge_threshold
        ):
            self._document.scroll_into_view(
                reference, behavior=self._settings.scroll_behavior, block="center"
            )

            def _settle() -> None:
                settled = self._place_and_apply(reference.rect(), floating, gap, margin)
                if on_settled is not None:
                    on_settled(settled)

            self._scheduler.after(self._settings.scroll_settle_ms, _settle)
            rect = reference.rect()
        return self._place_and_apply(rect, floating, gap, margin)

    def position_rect(
        self,
        reference: Rect,
        floating: NodeHandle,
        *,
        gap: Optional[float] = None,
        margin: Optional[float] = None,
    ) -> Placement:
        return self._place_and_apply(reference, floating, gap, margin)

    def center(
        self, floating: NodeHandle, size: Optional[Size] = None, *, class_prefix: str = "tooltip"
    ) -> Placement:
        placement = place_centered(size or self.measure(floating), self._document.viewport)
        self.apply(floating, placement, class_prefix=class_prefix)
        return placement

    def _place_and_apply(
        self, reference: Rect, floating: NodeHandle, gap: Optional[float], margin: Optional[float]
    ) -> Placement:
        placement = self.compute(reference, self.measure(floating), gap=gap, margin=margin)
        self.apply(floating, placement)
        return placement

    def apply(self, floating: NodeHandle, placement: Placement, *, class_prefix: str = "tooltip") -> None:
        floating.remove_class(*(f"{class_prefix}--{s}" for s in SIDES))
        if not placement.centered:
            floating.add_class(f"{class_prefix}--{placement.side}")
        floating.set_style("top", f"{placement.top:g}px")
        floating.set_style("left", f"{placement.left:g}px")
        if placement.arrow is None:
            floating.set_style("--arrow-offset", None)
        else:
            floating.set_style("--arrow-offset", f"{placement.arrow:g}px")
        floating.set_attribute("data-placement", placement.side)
        _log.debug("placed %r on %s at (%g, %g)", floating, placement.side, placement.left, placement.top)
        if self._event_bus is not None:
            self._event_bus.publish(
                FocusEvent.FLOATING_POSITIONED,
                {"floating": floating.node_id, "side": placement.side},
            )


def get_positioner() -> FloatingPositioner:
    return services.require(ServiceKey.POSITIONER, FloatingPositioner)


def position_floating_element(target: NodeHandle, floating: NodeHandle) -> Placement:
    """Collaborator entry point using the registered positioner."""
    return get_positioner().position(target, floating)
