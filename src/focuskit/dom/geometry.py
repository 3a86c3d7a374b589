"""Viewport geometry primitives.

Plain frozen dataclasses used by the placement algorithm, the document
models and the walkthrough spotlight. Coordinates follow the browser
convention: ``top``/``left`` grow downwards/rightwards and rectangles
returned by ``NodeHandle.rect()`` are expressed in viewport coordinates
(already adjusted for the current scroll offset).
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Rect", "Size", "Viewport"]


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    def contains(self, rect: "Rect") -> bool:
        return (
            rect.left >= 0
            and rect.top >= 0
            and rect.right <= self.width
            and rect.bottom <= self.height
        )


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def is_empty(self) -> bool:
        """True when the box has no area (element not laid out)."""
        return self.width <= 0 or self.height <= 0

    def padded(self, pad: float) -> "Rect":
        return Rect(self.top - pad, self.left - pad, self.width + pad * 2, self.height + pad * 2)

    def translated(self, dx: float = 0, dy: float = 0) -> "Rect":
        return Rect(self.top + dy, self.left + dx, self.width, self.height)

    def is_outside(self, viewport: Viewport) -> bool:
        """Return True when no part of the box can be seen in ``viewport``."""
        return (
            self.right < 0
            or self.left > viewport.width
            or self.bottom < 0
            or self.top > viewport.height
        )

    @classmethod
    def empty(cls) -> "Rect":
        return cls(0, 0, 0, 0)
