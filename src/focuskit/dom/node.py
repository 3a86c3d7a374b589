"""Capability interfaces the focus subsystem is written against.

The scanner, trap, positioner, cycler and walkthrough engine never touch a
concrete rendering engine. They talk to a ``NodeHandle`` (one element) and a
``Document`` (global queries, focus, scrolling, event dispatch). The soup
backed implementation in ``focuskit.dom.soup_document`` satisfies both and
is what the tests use.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from .events import DomEvent, EventListener, KeyEvent
from .geometry import Rect, Viewport

__all__ = ["NodeHandle", "Document", "LiveRegion", "iter_ancestors"]


@runtime_checkable
class NodeHandle(Protocol):  # noqa: D401 - structural
    @property
    def tag_name(self) -> str: ...  # pragma: no cover

    @property
    def node_id(self) -> Optional[str]: ...  # pragma: no cover

    @property
    def text(self) -> str: ...  # pragma: no cover

    def set_text(self, value: str) -> None: ...  # pragma: no cover

    def is_hidden(self) -> bool: ...  # pragma: no cover

    def rect(self) -> Rect: ...  # pragma: no cover

    def children(self) -> List["NodeHandle"]: ...  # pragma: no cover

    def parent(self) -> Optional["NodeHandle"]: ...  # pragma: no cover

    def get_attribute(self, name: str) -> Optional[str]: ...  # pragma: no cover

    def set_attribute(self, name: str, value: str) -> None: ...  # pragma: no cover

    def remove_attribute(self, name: str) -> None: ...  # pragma: no cover

    def has_class(self, name: str) -> bool: ...  # pragma: no cover

    def add_class(self, *names: str) -> None: ...  # pragma: no cover

    def remove_class(self, *names: str) -> None: ...  # pragma: no cover

    def style(self, name: str) -> Optional[str]: ...  # pragma: no cover

    def set_style(self, name: str, value: Optional[str]) -> None: ...  # pragma: no cover

    def select(self, selector: str) -> List["NodeHandle"]: ...  # pragma: no cover

    def matches(self, selector: str) -> bool: ...  # pragma: no cover

    def closest(self, selector: str) -> Optional["NodeHandle"]: ...  # pragma: no cover

    def contains(self, other: "NodeHandle") -> bool: ...  # pragma: no cover

    def focus(self) -> None: ...  # pragma: no cover

    def add_listener(self, event_type: str, handler: EventListener) -> None: ...  # pragma: no cover

    def remove_listener(self, event_type: str, handler: EventListener) -> None: ...  # pragma: no cover

    def append_child(self, tag_name: str, classes: Sequence[str] = ()) -> "NodeHandle": ...  # pragma: no cover

    def clear_children(self) -> None: ...  # pragma: no cover


@runtime_checkable
class Document(Protocol):  # noqa: D401 - structural
    @property
    def viewport(self) -> Viewport: ...  # pragma: no cover

    @property
    def scroll_y(self) -> float: ...  # pragma: no cover

    @property
    def active_element(self) -> Optional[NodeHandle]: ...  # pragma: no cover

    def query(self, selector: str) -> Optional[NodeHandle]: ...  # pragma: no cover

    def query_all(self, selector: str) -> List[NodeHandle]: ...  # pragma: no cover

    def get_by_id(self, element_id: str) -> Optional[NodeHandle]: ...  # pragma: no cover

    def scroll_into_view(self, node: NodeHandle, *, behavior: str = "smooth", block: str = "center") -> None: ...  # pragma: no cover

    def resize(self, width: float, height: float) -> None: ...  # pragma: no cover

    def add_listener(self, event_type: str, handler: EventListener, *, capture: bool = False) -> None: ...  # pragma: no cover

    def remove_listener(self, event_type: str, handler: EventListener, *, capture: bool = False) -> None: ...  # pragma: no cover

    def dispatch(self, target: Optional[NodeHandle], event: DomEvent) -> DomEvent: ...  # pragma: no cover

    def press_key(self, key: str, *, shift: bool = False, ctrl: bool = False, meta: bool = False) -> KeyEvent: ...  # pragma: no cover

    def click(self, node: NodeHandle) -> DomEvent: ...  # pragma: no cover


class LiveRegion(Protocol):
    """Anything the announcer can write text into."""

    def set_text(self, value: str) -> None: ...  # pragma: no cover


def iter_ancestors(node: NodeHandle, stop: Optional[NodeHandle] = None) -> Iterable[NodeHandle]:
    """Yield ``node`` and its ancestors, up to and including ``stop``."""
    cursor: Optional[NodeHandle] = node
    while cursor is not None:
        yield cursor
        if stop is not None and cursor == stop:
            return
        cursor = cursor.parent()
