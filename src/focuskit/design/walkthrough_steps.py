"""Walkthrough step definitions and registry.

Steps are static configuration: built once at startup, never mutated. Each
names the element it highlights (CSS selector), the descriptive copy shown
on the tour card, and an optional pair of lifecycle hooks. Hooks may mutate
page elements (open a drawer, reveal a skip link) but receive nothing from
the engine and must not depend on its internals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

__all__ = [
    "StepHooks",
    "WalkthroughStep",
    "WalkthroughDefinition",
    "register_walkthrough",
    "get_walkthrough",
    "list_walkthroughs",
    "clear_walkthroughs",
]

Hook = Callable[[], None]


@dataclass(frozen=True)
class StepHooks:
    on_enter: Optional[Hook] = None
    on_leave: Optional[Hook] = None


@dataclass(frozen=True)
class WalkthroughStep:
    target: str
    title: str
    description: str
    wcag: str = ""
    impact: str = ""
    screen_reader_preview: str = ""
    spotlight_target: Optional[str] = None  # highlighted instead once on_enter revealed it
    hooks: StepHooks = field(default_factory=StepHooks)


@dataclass(frozen=True)
class WalkthroughDefinition:
    id: str
    steps: Sequence[WalkthroughStep]
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))
        self.validate()

    def validate(self) -> None:
        if not self.steps:
            raise ValueError(f"Walkthrough {self.id!r} has no steps")
        for i, step in enumerate(self.steps):
            if not step.target.strip():
                raise ValueError(f"Step {i + 1} of walkthrough {self.id!r} has an empty target selector")
            if not step.title.strip():
                raise ValueError(f"Step {i + 1} of walkthrough {self.id!r} has no title")

    def __len__(self) -> int:
        return len(self.steps)

    def titles(self) -> List[str]:
        return [s.title for s in self.steps]


_registry: Dict[str, WalkthroughDefinition] = {}


def register_walkthrough(defn: WalkthroughDefinition) -> None:
    if defn.id in _registry:
        raise ValueError(f"Walkthrough already registered: {defn.id}")
    _registry[defn.id] = defn


def get_walkthrough(walkthrough_id: str) -> WalkthroughDefinition:
    return _registry[walkthrough_id]


def list_walkthroughs() -> List[WalkthroughDefinition]:
    return list(_registry.values())


def clear_walkthroughs() -> None:
    _registry.clear()
