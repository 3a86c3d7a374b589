"""In-process capture of recent focus subsystem log records.

Attaches a handler to the ``focuskit`` logger (or any named logger) that
stores recent records in a ring buffer and re-publishes them as
``FocusEvent.LOG_RECORD_ADDED`` so a debug overlay can show what the trap,
cycler and walkthrough engine did without a console.
"""

from __future__ import annotations

import json
import logging
import os
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Deque, List, Optional

from .event_bus import EventBus, FocusEvent
from .service_locator import ServiceKey, services

__all__ = ["LogEntry", "LoggingService", "get_logging_service"]


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__(level=logging.DEBUG)
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest(record)


class LoggingService:
    def __init__(
        self,
        capacity: int = 200,
        *,
        logger_name: str = "focuskit",
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._logger_name = logger_name
        self._event_bus = event_bus
        self._attached = False

    # Lifecycle --------------------------------------------------------
    def attach(self) -> None:
        if self._attached:
            return
        logger = logging.getLogger(self._logger_name)
        logger.addHandler(self._handler)
        if logger.level == logging.NOTSET or logger.level > logging.DEBUG:
            logger.setLevel(logging.DEBUG)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        logging.getLogger(self._logger_name).removeHandler(self._handler)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def _ingest(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        with self._lock:
            self._entries.append(entry)
        if self._event_bus is not None:
            self._event_bus.publish(
                FocusEvent.LOG_RECORD_ADDED,
                {"level": entry.level, "name": entry.name, "message": entry.message[:120]},
            )

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(self, *, level: str | None = None, name_contains: str | None = None) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def export_jsonl(self, path: str | None = None, *, level: str | None = None) -> int:
        """Write (filtered) entries as JSON Lines; returns the line count."""
        entries = self.filter(level=level)
        file_path = path or os.path.join(os.getcwd(), "focuskit-log.jsonl")
        with open(file_path, "w", encoding="utf-8") as f:
            for e in entries:
                f.write(
                    json.dumps(
                        {"level": e.level, "name": e.name, "message": e.message, "created": e.created},
                        sort_keys=True,
                    )
                    + "\n"
                )
        return len(entries)


def get_logging_service() -> LoggingService:
    return services.require(ServiceKey.LOGGING, LoggingService)
