"""Live region on top of a ``QLabel``.

Writes announcements into the label text and its accessible name. Qt
raises the name-change notification on ``setAccessibleName`` itself, so
screen readers attached to the accessibility bridge re-read the label. The
label is usually kept off-screen or zero-sized; it only has to exist.
"""

from __future__ import annotations

from PyQt6.QtWidgets import QLabel, QWidget

__all__ = ["QtLiveRegion"]


class QtLiveRegion:
    def __init__(self, label: QLabel | None = None, *, parent: QWidget | None = None) -> None:
        self._label = label if label is not None else QLabel(parent)
        if not self._label.objectName():
            self._label.setObjectName("live-region")
        self._label.setAccessibleName("")
        self._writes = 0

    @property
    def label(self) -> QLabel:
        return self._label

    @property
    def writes(self) -> int:
        """Number of ``set_text`` calls so far (clears included)."""
        return self._writes

    def text(self) -> str:
        return self._label.text()

    def set_text(self, value: str) -> None:
        self._label.setText(value)
        self._label.setAccessibleName(value)
        self._writes += 1
