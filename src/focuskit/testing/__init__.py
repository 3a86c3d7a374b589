"""Testing utilities for headless focus verification.

Nothing here imports PyQt; the document model is enough to check focus
order, traps and walkthrough behaviour.
"""

from __future__ import annotations

__all__ = [
    "compute_logical_focus_order",
    "focus_order_ids",
    "tab_traversal",
    "tab_traversal_ids",
    "box",
    "build_document",
    "WALKTHROUGH_CHROME",
]

from .focus import (
    compute_logical_focus_order,
    focus_order_ids,
    tab_traversal,
    tab_traversal_ids,
)
from .pages import box, build_document, WALKTHROUGH_CHROME
