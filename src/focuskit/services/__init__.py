"""Service layer exports.

Responsibilities:
 - Dependency/service locator (`services`) and EventBus publish/subscribe core
 - Announcer, focus traps, floating positioner
 - Landmark cycler, tab list controller, keyboard shortcuts, tooltips
 - Walkthrough engine

Locator keys are the ``ServiceKey`` members (``event_bus``, ``announcer``,
``focus_traps``, ``positioner`` and the rest).
"""

from .service_locator import services, ServiceKey, ServiceLocator  # noqa: F401
from .event_bus import EventBus, FocusEvent  # noqa: F401
from .scheduler import Scheduler, ManualScheduler  # noqa: F401
from .announcer import Announcer, announce  # noqa: F401
from .reachability import find_reachable, first_reachable, is_reachable  # noqa: F401
from .focus_trap import FocusTrapManager, trap_focus, release_focus  # noqa: F401
from .positioner import FloatingPositioner, position_floating_element  # noqa: F401
from .landmark_cycler import Direction, Landmark, LandmarkCycler  # noqa: F401
from .tab_list import TabListController  # noqa: F401
from .shortcut_registry import ShortcutEntry, ShortcutRegistry, normalize_sequence  # noqa: F401
from .keyboard_shortcuts import KeyboardShortcuts  # noqa: F401
from .tooltip_service import TooltipBinder  # noqa: F401
from .walkthrough import WalkthroughElements, WalkthroughEngine  # noqa: F401
from .logging_service import LoggingService  # noqa: F401

__all__ = [
    "services",
    "ServiceKey",
    "ServiceLocator",
    "EventBus",
    "FocusEvent",
    "Scheduler",
    "ManualScheduler",
    "Announcer",
    "announce",
    "find_reachable",
    "first_reachable",
    "is_reachable",
    "FocusTrapManager",
    "trap_focus",
    "release_focus",
    "FloatingPositioner",
    "position_floating_element",
    "Direction",
    "Landmark",
    "LandmarkCycler",
    "TabListController",
    "ShortcutEntry",
    "ShortcutRegistry",
    "normalize_sequence",
    "KeyboardShortcuts",
    "TooltipBinder",
    "WalkthroughElements",
    "WalkthroughEngine",
    "LoggingService",
]
