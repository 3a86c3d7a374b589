"""Qt event loop backed ``Scheduler``.

``after_paint`` maps to a zero-delay single shot timer: it runs once control
returns to the event loop, after pending paint events have been processed.
``after`` is a plain ``QTimer.singleShot``. Like the headless scheduler,
nothing is cancelable.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from PyQt6.QtCore import QObject, QTimer

__all__ = ["QtScheduler"]

_log = logging.getLogger(__name__)


class QtScheduler(QObject):
    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pending: List[QTimer] = []

    def after_paint(self, fn: Callable[[], None]) -> None:
        self.after(0, fn)

    def after(self, ms: float, fn: Callable[[], None]) -> None:
        timer = QTimer(self)
        timer.setSingleShot(True)

        def _fire() -> None:
            if timer in self._pending:
                self._pending.remove(timer)
            timer.deleteLater()
            fn()

        timer.timeout.connect(_fire)  # type: ignore[attr-defined]
        self._pending.append(timer)
        timer.start(max(0, int(ms)))

    def pending(self) -> int:
        return len(self._pending)
