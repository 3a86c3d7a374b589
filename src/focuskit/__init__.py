"""focuskit public API.

Small curated surface for callers (page bootstrap, tests) that should not
depend on deep module paths.

- Keep exports minimal; prefer namespaced access (``from focuskit import design``).
- No Qt imports here: ``focuskit.qt`` is imported explicitly by callers
  that run an event loop.
"""

from __future__ import annotations

from .services.service_locator import (  # noqa: F401
    services,
    ServiceKey,
    ServiceLocator,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
)
from .services.event_bus import (  # noqa: F401
    EventBus,
    FocusEvent,
    Event,
)
from .app.bootstrap import create_app, AppContext  # noqa: F401

from . import design  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "services",
    "ServiceKey",
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EventBus",
    "FocusEvent",
    "Event",
    "create_app",
    "AppContext",
    "design",
]
