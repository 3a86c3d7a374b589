"""Pure layout and tour configuration (no document access)."""

from .placement import Placement, place, place_centered, needs_scroll, clamp  # noqa: F401
from .walkthrough_steps import (  # noqa: F401
    StepHooks,
    WalkthroughStep,
    WalkthroughDefinition,
    register_walkthrough,
    get_walkthrough,
    list_walkthroughs,
    clear_walkthroughs,
)

__all__ = [
    "Placement",
    "place",
    "place_centered",
    "needs_scroll",
    "clamp",
    "StepHooks",
    "WalkthroughStep",
    "WalkthroughDefinition",
    "register_walkthrough",
    "get_walkthrough",
    "list_walkthroughs",
    "clear_walkthroughs",
]
