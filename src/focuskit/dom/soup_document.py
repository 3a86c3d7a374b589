"""Static HTML document model backed by BeautifulSoup.

We do not embed a web engine. Instead the page markup is parsed with
BeautifulSoup and the few pieces of browser state the focus subsystem reads
are modelled on top of it:

 - Layout: every element may carry ``data-rect="top,left,width,height"`` in
   page coordinates. Inline ``top``/``left``/``width``/``height`` styles (in
   px) override the corresponding component, which is how positioned
   floating elements report their new box. Elements with ``position: fixed``
   (or a ``data-fixed`` attribute) are laid out in viewport coordinates;
   everything else is shifted by the current scroll offset. No box, a
   ``hidden`` attribute or ``display: none`` on the element or an ancestor
   means "not rendered" and yields an empty rect.
 - Focus: a single active element; ``focus()`` is ignored for elements that
   are not focusable (no tabindex, not a native control) or not rendered.
 - Events: listeners per node plus document level capture / bubble lists.
   Listener failures are logged and collected in ``listener_errors`` so one
   broken handler cannot abort a dispatch.
 - Native keyboard behaviour: an un-prevented Tab keydown moves focus to the
   next (Shift+Tab: previous) reachable element of the page, wrapping.

Selectors are resolved by bs4's CSS support (soupsieve).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from bs4 import BeautifulSoup, Tag  # type: ignore

from .events import DomEvent, EventListener, KeyEvent
from .geometry import Rect, Viewport

__all__ = ["SoupDocument", "SoupNode", "parse_style", "format_style"]

_log = logging.getLogger(__name__)

_NATIVE_FOCUSABLE = {"a", "button", "input", "select", "textarea"}


def parse_style(value: Optional[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    if not value:
        return out
    for chunk in value.split(";"):
        if ":" not in chunk:
            continue
        name, _, val = chunk.partition(":")
        name = name.strip().lower()
        if name:
            out[name] = val.strip()
    return out


def format_style(values: Dict[str, str]) -> str:
    return "; ".join(f"{k}: {v}" for k, v in values.items())


def _px(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    text = value.strip().lower()
    if text.endswith("px"):
        text = text[:-2]
    try:
        return float(text)
    except ValueError:
        return None


def _parse_rect(value: Optional[str]) -> Optional[Tuple[float, float, float, float]]:
    if not value:
        return None
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 4:
        return None
    try:
        top, left, width, height = (float(p) for p in parts)
    except ValueError:
        return None
    return top, left, width, height


class SoupNode:
    """``NodeHandle`` over a bs4 ``Tag`` owned by a ``SoupDocument``.

    Wrappers are cheap and created on demand; equality and hashing follow the
    identity of the underlying tag (bs4's own ``Tag.__eq__`` compares markup,
    which would make two identical buttons indistinguishable).
    """

    __slots__ = ("_doc", "_tag")

    def __init__(self, document: "SoupDocument", tag: Tag) -> None:
        self._doc = document
        self._tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        ident = f"#{self.node_id}" if self.node_id else ""
        return f"<SoupNode {self.tag_name}{ident}>"

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def document(self) -> "SoupDocument":
        return self._doc

    # Identity ---------------------------------------------------------
    @property
    def tag_name(self) -> str:
        return (self._tag.name or "").lower()

    @property
    def node_id(self) -> Optional[str]:
        return self.get_attribute("id")

    # Text -------------------------------------------------------------
    @property
    def text(self) -> str:
        return self._tag.get_text()

    def set_text(self, value: str) -> None:
        self._tag.clear()
        if value:
            self._tag.append(value)

    # Attributes -------------------------------------------------------
    def get_attribute(self, name: str) -> Optional[str]:
        value = self._tag.attrs.get(name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)

    def set_attribute(self, name: str, value: str) -> None:
        if name == "class":
            self._tag["class"] = value.split()
        else:
            self._tag[name] = str(value)

    def remove_attribute(self, name: str) -> None:
        self._tag.attrs.pop(name, None)

    def _classes(self) -> List[str]:
        value = self._tag.attrs.get("class") or []
        if isinstance(value, str):
            return value.split()
        return list(value)

    def has_class(self, name: str) -> bool:
        return name in self._classes()

    def add_class(self, *names: str) -> None:
        classes = self._classes()
        for n in names:
            if n not in classes:
                classes.append(n)
        self._tag["class"] = classes

    def remove_class(self, *names: str) -> None:
        classes = [c for c in self._classes() if c not in names]
        if classes:
            self._tag["class"] = classes
        else:
            self._tag.attrs.pop("class", None)

    def style(self, name: str) -> Optional[str]:
        return parse_style(self.get_attribute("style")).get(name.lower())

    def set_style(self, name: str, value: Optional[str]) -> None:
        styles = parse_style(self.get_attribute("style"))
        key = name.lower()
        if value is None or value == "":
            styles.pop(key, None)
        else:
            styles[key] = str(value)
        if styles:
            self._tag["style"] = format_style(styles)
        else:
            self._tag.attrs.pop("style", None)

    # Visibility & layout ----------------------------------------------
    def is_hidden(self) -> bool:
        """Hidden from assistive technology (``aria-hidden="true"``)."""
        return (self.get_attribute("aria-hidden") or "").strip().lower() == "true"

    def is_rendered(self) -> bool:
        for tag in self._tag_chain():
            if "hidden" in tag.attrs:
                return False
            styles = parse_style(tag.attrs.get("style"))
            if styles.get("display", "").lower() == "none":
                return False
        return True

    def is_fixed(self) -> bool:
        return "data-fixed" in self._tag.attrs or (self.style("position") or "").lower() == "fixed"

    def page_rect(self) -> Rect:
        """Layout box in page coordinates (ignores scrolling)."""
        if not self.is_rendered():
            return Rect.empty()
        base = _parse_rect(self.get_attribute("data-rect"))
        styles = parse_style(self.get_attribute("style"))
        top = _px(styles.get("top"))
        left = _px(styles.get("left"))
        width = _px(styles.get("width"))
        height = _px(styles.get("height"))
        if base is None and (width is None or height is None):
            return Rect.empty()
        b_top, b_left, b_width, b_height = base if base else (0.0, 0.0, 0.0, 0.0)
        return Rect(
            top=top if top is not None else b_top,
            left=left if left is not None else b_left,
            width=width if width is not None else b_width,
            height=height if height is not None else b_height,
        )

    def rect(self) -> Rect:
        box = self.page_rect()
        if box.is_empty or self.is_fixed():
            return box
        return box.translated(dy=-self._doc.scroll_y)

    # Tree -------------------------------------------------------------
    def _tag_chain(self):
        tag: Optional[Tag] = self._tag
        while tag is not None and not isinstance(tag, BeautifulSoup):
            yield tag
            tag = tag.parent

    def children(self) -> List["SoupNode"]:
        return [self._doc.wrap(c) for c in self._tag.children if isinstance(c, Tag)]

    def parent(self) -> Optional["SoupNode"]:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return self._doc.wrap(parent)

    def select(self, selector: str) -> List["SoupNode"]:
        return [self._doc.wrap(t) for t in self._tag.select(selector)]

    def matches(self, selector: str) -> bool:
        return bool(self._tag.css.match(selector))

    def closest(self, selector: str) -> Optional["SoupNode"]:
        found = self._tag.css.closest(selector)
        return self._doc.wrap(found) if found is not None else None

    def contains(self, other: "SoupNode") -> bool:
        if other == self:
            return True
        return any(p is self._tag for p in other._tag.parents)

    def append_child(self, tag_name: str, classes: Sequence[str] = ()) -> "SoupNode":
        new = self._doc.soup.new_tag(tag_name)
        if classes:
            new["class"] = list(classes)
        self._tag.append(new)
        return self._doc.wrap(new)

    def clear_children(self) -> None:
        self._tag.clear()

    # Focus & events ---------------------------------------------------
    def is_focusable(self) -> bool:
        if not self.is_rendered():
            return False
        if "tabindex" in self._tag.attrs:
            return True
        if self.tag_name not in _NATIVE_FOCUSABLE:
            return False
        if self.tag_name == "a":
            return "href" in self._tag.attrs
        return "disabled" not in self._tag.attrs

    def focus(self) -> None:
        self._doc._set_active(self)

    def add_listener(self, event_type: str, handler: EventListener) -> None:
        bucket = self._doc._node_listeners.setdefault(id(self._tag), {})
        bucket.setdefault(event_type, []).append(handler)

    def remove_listener(self, event_type: str, handler: EventListener) -> None:
        bucket = self._doc._node_listeners.get(id(self._tag), {})
        handlers = bucket.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event_type: str) -> int:
        return len(self._doc._node_listeners.get(id(self._tag), {}).get(event_type, ()))


class SoupDocument:
    """Headless page: markup, viewport, scroll offset, focus and events."""

    def __init__(
        self,
        markup: Union[str, BeautifulSoup],
        *,
        viewport: Viewport | Tuple[float, float] = (1280, 800),
        page_height: Optional[float] = None,
    ) -> None:
        self.soup = markup if isinstance(markup, BeautifulSoup) else BeautifulSoup(markup, "html.parser")
        self._viewport = viewport if isinstance(viewport, Viewport) else Viewport(*viewport)
        self._page_height = page_height
        self._scroll_y = 0.0
        self._active: Optional[Tag] = None
        self._node_listeners: Dict[int, Dict[str, List[EventListener]]] = {}
        self._capture: Dict[str, List[EventListener]] = {}
        self._bubble: Dict[str, List[EventListener]] = {}
        self.listener_errors: List[Tuple[DomEvent, BaseException]] = []
        self.scroll_log: List[Tuple[Optional[str], str, str]] = []

    # Wrapping / queries -----------------------------------------------
    def wrap(self, tag: Tag) -> SoupNode:
        return SoupNode(self, tag)

    @property
    def root(self) -> SoupNode:
        return self.wrap(self.soup)

    def query(self, selector: str) -> Optional[SoupNode]:
        found = self.soup.select_one(selector)
        return self.wrap(found) if found is not None else None

    def query_all(self, selector: str) -> List[SoupNode]:
        return [self.wrap(t) for t in self.soup.select(selector)]

    def get_by_id(self, element_id: str) -> Optional[SoupNode]:
        found = self.soup.find(id=element_id)
        return self.wrap(found) if isinstance(found, Tag) else None

    # Viewport & scrolling ---------------------------------------------
    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def scroll_y(self) -> float:
        return self._scroll_y

    def scroll_to(self, y: float) -> None:
        limit = None
        if self._page_height is not None:
            limit = max(0.0, self._page_height - self._viewport.height)
        y = max(0.0, y)
        if limit is not None:
            y = min(y, limit)
        self._scroll_y = y

    def scroll_into_view(self, node: SoupNode, *, behavior: str = "smooth", block: str = "center") -> None:
        box = node.page_rect()
        self.scroll_log.append((node.node_id, behavior, block))
        if box.is_empty or node.is_fixed():
            return
        if block == "center":
            self.scroll_to(box.center_y - self._viewport.height / 2)
        elif block == "end":
            self.scroll_to(box.bottom - self._viewport.height)
        else:
            self.scroll_to(box.top)

    def resize(self, width: float, height: float) -> None:
        self._viewport = Viewport(width, height)
        self.dispatch(None, DomEvent("resize"))

    # Focus ------------------------------------------------------------
    @property
    def active_element(self) -> Optional[SoupNode]:
        return self.wrap(self._active) if self._active is not None else None

    def _set_active(self, node: SoupNode) -> None:
        if not node.is_focusable():
            _log.debug("focus ignored for non-focusable %r", node)
            return
        if self._active is node.tag:
            return
        self._active = node.tag
        self.dispatch(node, DomEvent("focusin"))

    def blur(self) -> None:
        self._active = None

    # Events -----------------------------------------------------------
    def add_listener(self, event_type: str, handler: EventListener, *, capture: bool = False) -> None:
        target = self._capture if capture else self._bubble
        target.setdefault(event_type, []).append(handler)

    def remove_listener(self, event_type: str, handler: EventListener, *, capture: bool = False) -> None:
        handlers = (self._capture if capture else self._bubble).get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def _invoke(self, handlers: List[EventListener], event: DomEvent, current) -> None:
        for handler in list(handlers):
            if event.propagation_stopped:
                return
            event.current_target = current
            try:
                handler(event)
            except Exception as exc:  # noqa: BLE001 - isolate listener failures
                _log.exception("listener for %s failed", event.type)
                self.listener_errors.append((event, exc))

    def dispatch(self, target: Optional[SoupNode], event: DomEvent, *, bubbles: bool = True) -> DomEvent:
        event.target = target
        self._invoke(self._capture.get(event.type, []), event, None)
        if target is not None:
            chain = [target]
            if bubbles:
                cursor = target.parent()
                while cursor is not None:
                    chain.append(cursor)
                    cursor = cursor.parent()
            for node in chain:
                if event.propagation_stopped:
                    break
                handlers = self._node_listeners.get(id(node.tag), {}).get(event.type, [])
                self._invoke(handlers, event, node)
        if bubbles and not event.propagation_stopped:
            self._invoke(self._bubble.get(event.type, []), event, None)
        return event

    def press_key(self, key: str, *, shift: bool = False, ctrl: bool = False, meta: bool = False) -> KeyEvent:
        event = KeyEvent(key=key, shift=shift, ctrl=ctrl, meta=meta)
        self.dispatch(self.active_element, event)
        if key == "Tab" and not event.default_prevented:
            self._native_tab(backward=shift)
        return event

    def _native_tab(self, *, backward: bool) -> None:
        from focuskit.services.reachability import find_reachable  # local import avoids a cycle

        order = find_reachable(self.root)
        if not order:
            return
        active = self.active_element
        if active is None or active not in order:
            nxt = order[-1] if backward else order[0]
        else:
            idx = order.index(active)
            nxt = order[(idx - 1) % len(order)] if backward else order[(idx + 1) % len(order)]
        nxt.focus()

    def click(self, node: SoupNode) -> DomEvent:
        return self.dispatch(node, DomEvent("click"))

    def hover(self, node: SoupNode) -> DomEvent:
        return self.dispatch(node, DomEvent("mouseenter"), bubbles=False)
