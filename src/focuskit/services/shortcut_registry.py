"""Key-binding table for the page.

Every component that listens for keys (landmark cycler, search/help
shortcuts, walkthrough) records its bindings here with itself as ``owner``
so that ``unbind`` can drop them again with ``release(owner)``. The help bar
and tests read the table back through ``list`` / ``by_category``.

 - Sequences are normalised to ``KeyEvent.sequence`` form: modifiers in
   ``Ctrl``, ``Meta``, ``Shift`` order, single characters upper-cased
   (``'shift+f6'`` -> ``'Shift+F6'``, ``'cmd+k'`` -> ``'Meta+K'``)
 - Duplicate ids are rejected (``register`` returns False); duplicate
   sequences are allowed and reported by ``find_conflicts``
 - ``match`` answers "who handles this keydown?"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from focuskit.dom.events import KeyEvent

__all__ = ["ShortcutEntry", "ShortcutRegistry", "normalize_sequence"]

_MODIFIER_ORDER = ("Ctrl", "Meta", "Shift")
_MODIFIER_ALIASES = {
    "ctrl": "Ctrl",
    "control": "Ctrl",
    "meta": "Meta",
    "cmd": "Meta",
    "shift": "Shift",
}


def normalize_sequence(sequence: str) -> str:
    """Canonical ``KeyEvent.sequence`` spelling of ``sequence``.

    Raises ValueError for an empty key or an unknown modifier.
    """
    parts = [p.strip() for p in sequence.split("+")]
    # "Ctrl++" binds the plus key itself
    if sequence.endswith("++"):
        parts = parts[:-2] + ["+"]
    key = parts[-1]
    if not key:
        raise ValueError(f"shortcut {sequence!r} has no key")
    mods = set()
    for raw in parts[:-1]:
        mod = _MODIFIER_ALIASES.get(raw.lower())
        if mod is None:
            raise ValueError(f"unknown modifier {raw!r} in shortcut {sequence!r}")
        mods.add(mod)
    if len(key) == 1:
        key = key.upper()
    else:
        key = key[0].upper() + key[1:]
    return "+".join([m for m in _MODIFIER_ORDER if m in mods] + [key])


@dataclass(frozen=True)
class ShortcutEntry:
    shortcut_id: str
    sequence: str
    description: str
    category: str = "General"
    owner: Optional[object] = field(default=None, compare=False, repr=False)


class ShortcutRegistry:
    def __init__(self) -> None:
        self._entries: Dict[str, ShortcutEntry] = {}

    def register(
        self,
        shortcut_id: str,
        sequence: str,
        description: str,
        category: str = "General",
        *,
        owner: Optional[object] = None,
    ) -> bool:
        if shortcut_id in self._entries:
            return False
        self._entries[shortcut_id] = ShortcutEntry(
            shortcut_id, normalize_sequence(sequence), description, category, owner
        )
        return True

    def unregister(self, shortcut_id: str) -> bool:
        return self._entries.pop(shortcut_id, None) is not None

    def release(self, owner: object) -> int:
        """Drop every entry registered by ``owner``; returns how many went."""
        ids = [k for k, e in self._entries.items() if e.owner is owner]
        for k in ids:
            del self._entries[k]
        return len(ids)

    def get(self, shortcut_id: str) -> Optional[ShortcutEntry]:
        return self._entries.get(shortcut_id)

    def list(self) -> List[ShortcutEntry]:
        return list(self._entries.values())

    def match(self, event: KeyEvent) -> List[ShortcutEntry]:
        seq = event.sequence
        return [e for e in self._entries.values() if e.sequence == seq]

    def by_category(self) -> Dict[str, List[ShortcutEntry]]:
        buckets: Dict[str, List[ShortcutEntry]] = {}
        for e in self._entries.values():
            buckets.setdefault(e.category, []).append(e)
        for lst in buckets.values():
            lst.sort(key=lambda x: x.sequence)
        return buckets

    def find_conflicts(self) -> Dict[str, List[ShortcutEntry]]:
        """Map sequence -> entries for sequences bound more than once."""
        seq_map: Dict[str, List[ShortcutEntry]] = {}
        for e in self._entries.values():
            seq_map.setdefault(e.sequence, []).append(e)
        return {k: v for k, v in seq_map.items() if len(v) > 1}
