"""Event objects dispatched through a ``Document``.

Only the handful of fields the focus subsystem reads are modelled. Handlers
receive the event instance and may call ``prevent_default`` (suppresses the
document's native behaviour, e.g. Tab focus movement) or
``stop_propagation`` (stops further listeners from running).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

__all__ = ["DomEvent", "KeyEvent", "EventListener"]


@dataclass
class DomEvent:
    type: str
    target: Optional[Any] = None
    current_target: Optional[Any] = None
    default_prevented: bool = field(default=False, init=False)
    propagation_stopped: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass
class KeyEvent(DomEvent):
    type: str = "keydown"
    key: str = ""
    shift: bool = False
    ctrl: bool = False
    meta: bool = False

    @property
    def sequence(self) -> str:
        """Qt-style sequence string, e.g. ``'Shift+F6'`` or ``'Ctrl+K'``."""
        parts = []
        if self.ctrl:
            parts.append("Ctrl")
        if self.meta:
            parts.append("Meta")
        if self.shift:
            parts.append("Shift")
        key = self.key.upper() if len(self.key) == 1 else self.key
        parts.append(key)
        return "+".join(parts)


EventListener = Callable[[DomEvent], None]
