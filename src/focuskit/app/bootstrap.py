"""Application bootstrap for the focus subsystem.

Responsibilities:
 - Load settings (``FOCUSKIT_*`` overrides) unless given explicitly
 - Create the shared services and register them with the service locator
 - Return a single context object exposing the collaborator API
   (``announce``, ``trap_focus``, ``position_floating_element``, the
   ``init_*`` registration calls)

The bootstrap avoids importing PyQt6 unless ``headless=False`` asks for the
Qt event loop scheduler, which keeps test collection fast and lets the
headless document model run without a display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from focuskit.config.settings import FocusSettings, load_settings
from focuskit.design.placement import Placement
from focuskit.design.walkthrough_steps import WalkthroughDefinition
from focuskit.dom.node import Document, LiveRegion, NodeHandle
from focuskit.services.announcer import Announcer
from focuskit.services.event_bus import EventBus
from focuskit.services.focus_trap import FocusTrapManager
from focuskit.services.keyboard_shortcuts import KeyboardShortcuts
from focuskit.services.landmark_cycler import LandmarkCycler
from focuskit.services.logging_service import LoggingService
from focuskit.services.positioner import FloatingPositioner
from focuskit.services.scheduler import ManualScheduler, Scheduler
from focuskit.services.service_locator import ServiceKey, ServiceLocator, services
from focuskit.services.shortcut_registry import ShortcutRegistry
from focuskit.services.tab_list import TabListController
from focuskit.services.tooltip_service import TooltipBinder
from focuskit.services.walkthrough import WalkthroughElements, WalkthroughEngine

__all__ = ["AppContext", "create_app", "LIVE_REGION_ID"]

_log = logging.getLogger(__name__)

LIVE_REGION_ID = "live-region"


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    document: Page the services operate on
    settings: Effective settings (defaults plus environment overrides)
    scheduler: Deferral backend (ManualScheduler headless, QtScheduler otherwise)
    event_bus: Fresh EventBus for this bootstrap
    logging_service: Ring buffer attached to the ``focuskit`` logger
    announcer, traps, positioner: Shared services collaborators call into
    shortcuts: Registry filled by the keyboard shortcuts and landmark cycler
    services: Global service locator (post-initialization state)
    metadata: Free-form dict (e.g. headless flag, live region id)
    """

    document: Document
    settings: FocusSettings
    scheduler: Scheduler
    event_bus: EventBus
    logging_service: LoggingService
    announcer: Announcer
    traps: FocusTrapManager
    positioner: FloatingPositioner
    shortcuts: ShortcutRegistry
    services: ServiceLocator
    metadata: dict[str, Any] = field(default_factory=dict)
    walkthroughs: List[WalkthroughEngine] = field(default_factory=list)

    # Collaborator API ---------------------------------------------------
    def announce(self, message: str) -> None:
        self.announcer.announce(message)

    def trap_focus(self, container: NodeHandle) -> None:
        self.traps.activate(container)

    def release_focus(self, container: NodeHandle) -> None:
        self.traps.deactivate(container)

    def position_floating_element(self, target: NodeHandle, floating: NodeHandle) -> Placement:
        return self.positioner.position(target, floating)

    # Registration calls -------------------------------------------------
    def init_landmark_cycling(
        self,
        elements: Sequence[Optional[NodeHandle]],
        names: Sequence[str],
        should_skip: Optional[Callable[[], bool]] = None,
    ) -> LandmarkCycler:
        cycler = LandmarkCycler.from_pairs(
            elements,
            names,
            self.announcer,
            self.scheduler,
            should_skip=should_skip,
            settings=self.settings,
            event_bus=self.event_bus,
        )
        cycler.bind(self.document, self.shortcuts)
        return cycler

    def init_drawer_tabs(self, tab_list_selector: str) -> TabListController:
        return TabListController(
            self.document, tab_list_selector, self.announcer, event_bus=self.event_bus
        )

    def init_tooltips(self) -> TooltipBinder:
        binder = TooltipBinder(self.document, self.positioner)
        count = binder.bind()
        _log.debug("bound %d tooltips", count)
        return binder

    def init_keyboard_shortcuts(self) -> KeyboardShortcuts:
        shortcuts = KeyboardShortcuts(self.document, self.announcer, registry=self.shortcuts)
        shortcuts.bind()
        return shortcuts

    def init_walkthrough(
        self,
        definition: WalkthroughDefinition,
        *,
        elements: Optional[WalkthroughElements] = None,
        on_start: Optional[Callable[[], None]] = None,
        lock_scroll: bool = True,
    ) -> WalkthroughEngine:
        engine = WalkthroughEngine(
            self.document,
            definition,
            self.announcer,
            self.traps,
            self.positioner,
            self.scheduler,
            elements=elements,
            settings=self.settings,
            on_start=on_start,
            lock_scroll=lock_scroll,
            event_bus=self.event_bus,
        )
        engine.bind()
        self.walkthroughs.append(engine)
        return engine


def _qt_scheduler() -> Scheduler:
    from focuskit.qt.scheduler import QtScheduler  # local import keeps Qt optional

    return QtScheduler()


def create_app(
    document: Document,
    scheduler: Optional[Scheduler] = None,
    live_region: Optional[LiveRegion] = None,
    settings: Optional[FocusSettings] = None,
    *,
    headless: bool = True,
    attach_logging: bool = True,
) -> AppContext:
    """Create the shared services for ``document`` and register them.

    Parameters
    ----------
    scheduler: Deferral backend; defaults to ``ManualScheduler`` when
        ``headless`` else ``QtScheduler``.
    live_region: Announcement target; defaults to the ``#live-region``
        element of the document (announcements are dropped when absent).
    settings: Explicit settings; defaults to ``load_settings()``.
    """
    if settings is None:
        settings = load_settings()
    if scheduler is None:
        scheduler = ManualScheduler() if headless else _qt_scheduler()
    if live_region is None:
        live_region = document.get_by_id(LIVE_REGION_ID)
        if live_region is None:
            _log.warning("no #%s element; announcements will be dropped", LIVE_REGION_ID)

    # Always provide fresh services each bootstrap (test isolation)
    bus = EventBus()
    logging_service = LoggingService(event_bus=bus)
    announcer = Announcer(live_region, scheduler, event_bus=bus)
    traps = FocusTrapManager(document, event_bus=bus)
    positioner = FloatingPositioner(document, scheduler, settings, event_bus=bus)

    replaced = services.install(
        {
            ServiceKey.EVENT_BUS: bus,
            ServiceKey.LOGGING: logging_service,
            ServiceKey.SETTINGS: settings,
            ServiceKey.SCHEDULER: scheduler,
            ServiceKey.ANNOUNCER: announcer,
            ServiceKey.FOCUS_TRAPS: traps,
            ServiceKey.POSITIONER: positioner,
        }
    )
    previous = replaced.get(ServiceKey.LOGGING.value)
    if isinstance(previous, LoggingService):
        previous.detach()
    if attach_logging:
        logging_service.attach()

    ctx = AppContext(
        document=document,
        settings=settings,
        scheduler=scheduler,
        event_bus=bus,
        logging_service=logging_service,
        announcer=announcer,
        traps=traps,
        positioner=positioner,
        shortcuts=ShortcutRegistry(),
        services=services,
        metadata={
            "headless": headless,
            "live_region": live_region is not None,
            "settings": settings.to_dict(),
        },
    )
    _log.info("focuskit bootstrap complete (headless=%s)", headless)
    return ctx
