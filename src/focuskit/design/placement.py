"""Floating element placement (pure geometry).

Given the reference box, the floating element's natural size and the
viewport, choose a side and compute a clamped position plus the coordinate
a directional arrow should point at.

Side priority:
 1. top, when there is room above and the element can be centered
    horizontally on the reference without crossing the margin
 2. bottom, same centering condition
 3. right, when there is horizontal room
 4. left
 5. bottom, forced, when nothing fits (deterministic fallback)

Space on a side counts as sufficient when it is at least
``size + gap + margin``. The centered cross-axis offset is clamped so the
element never crosses ``margin`` from either viewport edge; the arrow
coordinate is ``reference center - clamped offset`` so the arrow keeps
pointing at the reference when the box had to move. References entirely
outside the viewport are not placed directionally; the element is centered
in the viewport instead.

No errors are raised: zero sizes (not yet laid out) still produce a
deterministic placement.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from focuskit.dom.geometry import Rect, Size, Viewport

__all__ = [
    "Placement",
    "SIDES",
    "place",
    "place_centered",
    "clamp",
    "needs_scroll",
]

SIDES = ("top", "bottom", "right", "left")


@dataclass(frozen=True)
class Placement:
    side: str  # one of SIDES or "center"
    top: float
    left: float
    width: float
    height: float
    offset: float  # clamped cross-axis coordinate (left for top/bottom, top for left/right)
    arrow: Optional[float]  # reference center relative to the floating box, None when centered

    @property
    def centered(self) -> bool:
        return self.side == "center"

    @property
    def rect(self) -> Rect:
        return Rect(self.top, self.left, self.width, self.height)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``; ``low`` wins when the range is inverted."""
    if high < low:
        return low
    return max(low, min(value, high))


def place_centered(floating: Size, viewport: Viewport) -> Placement:
    top = (viewport.height - floating.height) / 2
    left = (viewport.width - floating.width) / 2
    return Placement("center", top, left, floating.width, floating.height, left, None)


def place(
    reference: Rect,
    floating: Size,
    viewport: Viewport,
    *,
    gap: float,
    margin: float,
) -> Placement:
    if reference.is_outside(viewport):
        return place_centered(floating, viewport)

    w, h = max(0.0, floating.width), max(0.0, floating.height)
    vw, vh = viewport.width, viewport.height

    space_above = reference.top
    space_below = vh - reference.bottom
    space_left = reference.left
    space_right = vw - reference.right

    centered_left = reference.center_x - w / 2
    fits_centered = centered_left >= margin and centered_left + w <= vw - margin

    fits_top = space_above >= h + gap + margin
    fits_bottom = space_below >= h + gap + margin
    fits_left = space_left >= w + gap + margin
    fits_right = space_right >= w + gap + margin

    if fits_top and fits_centered:
        side = "top"
    elif fits_bottom and fits_centered:
        side = "bottom"
    elif fits_right:
        side = "right"
    elif fits_left:
        side = "left"
    else:
        side = "bottom"

    if side in ("top", "bottom"):
        left = clamp(centered_left, margin, vw - margin - w)
        raw_top = reference.top - gap - h if side == "top" else reference.bottom + gap
        top = clamp(raw_top, margin, vh - margin - h)
        offset = left
        arrow = reference.center_x - left
    else:
        top = clamp(reference.center_y - h / 2, margin, vh - margin - h)
        raw_left = reference.right + gap if side == "right" else reference.left - gap - w
        left = clamp(raw_left, margin, vw - margin - w)
        offset = top
        arrow = reference.center_y - top
    return Placement(side, top, left, w, h, offset, arrow)


def needs_scroll(reference: Rect, viewport: Viewport, threshold: float) -> bool:
    """True when the reference sits within ``threshold`` of the top or bottom edge."""
    return reference.top < threshold or reference.bottom > viewport.height - threshold
