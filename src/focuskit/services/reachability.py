"""Reachable element discovery.

A reachable element is interactive, laid out with a non-empty box, and not
hidden from assistive technology by itself or by any ancestor up to and
including the scanned container. The scan is re-run on every call; content
inside dialogs and drawers changes between key presses (tab panels swap,
validation panels appear).
"""

from __future__ import annotations

from typing import List, Optional

from focuskit.dom.node import NodeHandle, iter_ancestors

__all__ = [
    "FOCUSABLE_SELECTOR",
    "LANDMARK_FOCUSABLE_SELECTOR",
    "is_reachable",
    "find_reachable",
    "first_reachable",
]

FOCUSABLE_SELECTOR = (
    'a[href], button:not([disabled]):not([aria-disabled="true"]), '
    'textarea, input, select, [tabindex]:not([tabindex="-1"])'
)

# Landmark entry points only consider elements already in the natural tab order.
LANDMARK_FOCUSABLE_SELECTOR = (
    'a[href], button:not([disabled]):not([aria-disabled="true"]), '
    'input, select, textarea, [tabindex="0"]'
)


def is_reachable(node: NodeHandle, container: NodeHandle) -> bool:
    if node.rect().is_empty:
        return False
    for ancestor in iter_ancestors(node, stop=container):
        if ancestor.is_hidden():
            return False
    return True


def find_reachable(container: NodeHandle, selector: str = FOCUSABLE_SELECTOR) -> List[NodeHandle]:
    """Return reachable interactive descendants of ``container`` in document order."""
    return [n for n in container.select(selector) if is_reachable(n, container)]


def first_reachable(container: NodeHandle) -> Optional[NodeHandle]:
    for node in container.select(LANDMARK_FOCUSABLE_SELECTOR):
        if is_reachable(node, container):
            return node
    return None
