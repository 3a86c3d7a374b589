"""Document capability layer (geometry, events, node protocols, soup model)."""

from .geometry import Rect, Size, Viewport  # noqa: F401
from .events import DomEvent, KeyEvent  # noqa: F401
from .node import NodeHandle, Document, LiveRegion, iter_ancestors  # noqa: F401
from .soup_document import SoupDocument, SoupNode  # noqa: F401

__all__ = [
    "Rect",
    "Size",
    "Viewport",
    "DomEvent",
    "KeyEvent",
    "NodeHandle",
    "Document",
    "LiveRegion",
    "iter_ancestors",
    "SoupDocument",
    "SoupNode",
]
