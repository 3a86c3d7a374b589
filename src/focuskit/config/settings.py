"""Global configuration and constants for focus & attention management.

Module level ``Final`` constants are the documented defaults. ``FocusSettings``
bundles them into one object handed to the positioner, cycler and walkthrough
engine; ``load_settings`` applies ``FOCUSKIT_*`` environment overrides.

Design principles:
- Pure logic, no Qt import.
- Graceful fallback: an unparsable override logs a warning and keeps the
  default instead of raising.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Final, Mapping, Optional

__all__ = [
    "FocusSettings",
    "load_settings",
    "ENV_PREFIX",
    "TOOLTIP_GAP",
    "TOOLTIP_MARGIN",
    "CARD_GAP",
    "CARD_MARGIN",
    "CARD_MAX_WIDTH",
    "CARD_FALLBACK_HEIGHT",
    "SPOTLIGHT_PAD",
    "SCROLL_EDGE_THRESHOLD",
    "SCROLL_SETTLE_MS",
    "SPOTLIGHT_DELAY_MS",
    "LANDMARK_INDICATOR_MS",
]

_log = logging.getLogger(__name__)

ENV_PREFIX: Final = "FOCUSKIT_"

# Tooltip placement (px)
TOOLTIP_GAP: Final = 8
TOOLTIP_MARGIN: Final = 10

# Walkthrough card / spotlight (px)
CARD_GAP: Final = 16
CARD_MARGIN: Final = 16
CARD_MAX_WIDTH: Final = 420
CARD_FALLBACK_HEIGHT: Final = 400
SPOTLIGHT_PAD: Final = 8

# Scrolling
SCROLL_EDGE_THRESHOLD: Final = 60  # px from top/bottom viewport edge
SCROLL_SETTLE_MS: Final = 400

# Timers (ms)
SPOTLIGHT_DELAY_MS: Final = 350
LANDMARK_INDICATOR_MS: Final = 700


@dataclass(slots=True)
class FocusSettings:
    """Tunable numbers used across the subsystem.

    Attributes
    ----------
    tooltip_gap, tooltip_margin: Gap between reference and tooltip and the
        minimum distance from the viewport edge.
    card_gap, card_margin, card_max_width: Same for the walkthrough card;
        the card is ``min(card_max_width, viewport_width - 2 * card_margin)`` wide.
    card_fallback_height: Height assumed when the card has no layout yet.
    spotlight_pad: Padding around the highlighted target.
    scroll_edge_threshold: Distance from a vertical viewport edge below which
        a reference is scrolled into view before placement.
    scroll_settle_ms: Delay before re-deriving placement after a scroll.
    spotlight_delay_ms: Delay before re-positioning against a step's
        secondary spotlight target.
    landmark_indicator_ms: Lifetime of the transient landmark focus ring.
    smooth_scroll: Use ``behavior="smooth"`` when scrolling into view.
    """

    tooltip_gap: float = TOOLTIP_GAP
    tooltip_margin: float = TOOLTIP_MARGIN
    card_gap: float = CARD_GAP
    card_margin: float = CARD_MARGIN
    card_max_width: float = CARD_MAX_WIDTH
    card_fallback_height: float = CARD_FALLBACK_HEIGHT
    spotlight_pad: float = SPOTLIGHT_PAD
    scroll_edge_threshold: float = SCROLL_EDGE_THRESHOLD
    scroll_settle_ms: int = SCROLL_SETTLE_MS
    spotlight_delay_ms: int = SPOTLIGHT_DELAY_MS
    landmark_indicator_ms: int = LANDMARK_INDICATOR_MS
    smooth_scroll: bool = True

    @property
    def scroll_behavior(self) -> str:
        return "smooth" if self.smooth_scroll else "auto"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FocusSettings":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def _coerce(raw: str, default: Any, type_name: str) -> Any:
    if isinstance(default, bool):
        low = raw.strip().lower()
        if low in {"1", "true", "yes", "on"}:
            return True
        if low in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"not a boolean: {raw!r}")
    if type_name == "int":
        return int(raw)
    return float(raw)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> FocusSettings:
    """Build settings from defaults plus ``FOCUSKIT_<FIELD>`` overrides.

    ``FOCUSKIT_SCROLL_SETTLE_MS=250`` overrides ``scroll_settle_ms`` and so on.
    """
    env = os.environ if environ is None else environ
    settings = FocusSettings()
    for f in fields(FocusSettings):
        raw = env.get(ENV_PREFIX + f.name.upper())
        if raw is None:
            continue
        default = getattr(settings, f.name)
        try:
            value = _coerce(raw, default, str(f.type))
        except ValueError:
            _log.warning("ignoring invalid %s%s=%r", ENV_PREFIX, f.name.upper(), raw)
            continue
        if not isinstance(value, bool) and value < 0:
            _log.warning("ignoring negative %s%s=%r", ENV_PREFIX, f.name.upper(), raw)
            continue
        setattr(settings, f.name, value)
    return settings
