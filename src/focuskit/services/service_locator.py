"""Service registry for the focus subsystem.

Page code (dialogs, drawers, dropdowns) reaches the shared announcer, trap
manager and positioner without holding a reference to the ``AppContext``:

    from focuskit.services.service_locator import ServiceKey, services
    services.require(ServiceKey.ANNOUNCER, Announcer).announce("Saved")

``create_app`` fills every ``ServiceKey`` in one ``install`` call; the
previous values are handed back so the bootstrap can detach what it
replaces (the logging handler). Keys are plain strings underneath, so tests
may register extra entries.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from typing import Any, Dict, Generator, Iterable, List, Mapping, Optional, Type, TypeVar, Union

T = TypeVar("T")

__all__ = [
    "ServiceKey",
    "ServiceLocator",
    "services",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
]


class ServiceKey(str, Enum):
    EVENT_BUS = "event_bus"
    LOGGING = "logging_service"
    SETTINGS = "settings"
    SCHEDULER = "scheduler"
    ANNOUNCER = "announcer"
    FOCUS_TRAPS = "focus_traps"
    POSITIONER = "positioner"


KeyLike = Union[ServiceKey, str]


def _name(key: KeyLike) -> str:
    return key.value if isinstance(key, ServiceKey) else key


class ServiceAlreadyRegisteredError(RuntimeError):
    pass


class ServiceNotFoundError(KeyError):
    pass


@dataclass(frozen=True)
class _Entry:
    value: Any
    origin: Optional[str]


class ServiceLocator:
    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: Dict[str, _Entry] = {}

    # Registration -----------------------------------------------------
    def register(
        self, key: KeyLike, value: Any, *, allow_override: bool = False, origin: Optional[str] = None
    ) -> None:
        name = _name(key)
        with self._lock:
            if name in self._entries and not allow_override:
                raise ServiceAlreadyRegisteredError(f"service {name!r} already registered")
            self._entries[name] = _Entry(value, origin)

    def install(self, values: Mapping[KeyLike, Any], *, origin: str = "bootstrap") -> Dict[str, Any]:
        """Replace several services at once; returns the values they replaced."""
        replaced: Dict[str, Any] = {}
        with self._lock:
            for key, value in values.items():
                name = _name(key)
                prior = self._entries.get(name)
                if prior is not None:
                    replaced[name] = prior.value
                self._entries[name] = _Entry(value, origin)
        return replaced

    def unregister(self, key: KeyLike) -> None:
        with self._lock:
            self._entries.pop(_name(key), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    # Lookup -----------------------------------------------------------
    def get(self, key: KeyLike) -> Any:
        with self._lock:
            entry = self._entries.get(_name(key))
        if entry is None:
            raise ServiceNotFoundError(_name(key))
        return entry.value

    def try_get(self, key: KeyLike, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(_name(key))
        return default if entry is None else entry.value

    def get_typed(self, key: KeyLike, expected_type: Type[T]) -> T:
        value = self.get(key)
        if not isinstance(value, expected_type):
            raise TypeError(
                f"service {_name(key)!r} is {type(value).__name__}, expected {expected_type.__name__}"
            )
        return value

    def require(self, key: KeyLike, expected_type: Type[T]) -> T:
        """``get_typed`` with a hint that ``create_app`` has not run yet."""
        with self._lock:
            known = _name(key) in self._entries
        if not known:
            raise ServiceNotFoundError(f"{_name(key)!r} is not registered; call create_app() first")
        return self.get_typed(key, expected_type)

    def origin(self, key: KeyLike) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(_name(key))
        return None if entry is None else entry.origin

    def missing(self, keys: Iterable[KeyLike] = tuple(ServiceKey)) -> List[str]:
        """Standard keys that are not registered (all of them before bootstrap)."""
        with self._lock:
            return [_name(k) for k in keys if _name(k) not in self._entries]

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    # Tests ------------------------------------------------------------
    @contextmanager
    def override_context(self, **overrides: Any) -> Generator[None, None, None]:
        """Swap services for the duration of the block, then put the old ones back."""
        with self._lock:
            saved = {k: self._entries.get(k) for k in overrides}
            for k, v in overrides.items():
                self._entries[k] = _Entry(v, "override")
        try:
            yield
        finally:
            with self._lock:
                for k, entry in saved.items():
                    if entry is None:
                        self._entries.pop(k, None)
                    else:
                        self._entries[k] = entry


services = ServiceLocator()
