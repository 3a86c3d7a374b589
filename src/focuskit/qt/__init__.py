"""PyQt6 adapters (import explicitly; the rest of focuskit does not need Qt)."""

from .scheduler import QtScheduler  # noqa: F401
from .live_region import QtLiveRegion  # noqa: F401

__all__ = ["QtScheduler", "QtLiveRegion"]
