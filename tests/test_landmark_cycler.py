import pytest

from focuskit.services.announcer import Announcer
from focuskit.services.event_bus import EventBus, FocusEvent
from focuskit.services.landmark_cycler import INDICATOR_CLASS, Direction, Landmark, LandmarkCycler
from focuskit.services.shortcut_registry import ShortcutRegistry
from focuskit.testing import box, build_document

PAGE = f"""
<header id="banner" role="banner" {box(0, 0, 1280, 60)}>
  <a id="logo" href="/" {box(10, 10, 80, 40)}>Home</a>
</header>
<nav id="main-nav" {box(60, 0, 200, 700)}>
  <span tabindex="-1" id="nav-anchor" {box(60, 0, 10, 10)}></span>
  <a id="nav-first" href="#projects" {box(70, 10, 100, 20)}>Projects</a>
</nav>
<main id="main-content" {box(60, 200, 1080, 700)}>
  <p>Read-only content</p>
</main>
"""

NAMES = ["Header", "Navigation", "Main content"]


@pytest.fixture
def page(scheduler):
    doc = build_document(PAGE)
    announcer = Announcer(doc.get_by_id("live-region"), scheduler)
    elements = [doc.get_by_id("banner"), doc.get_by_id("main-nav"), doc.get_by_id("main-content")]
    cycler = LandmarkCycler.from_pairs(elements, NAMES, announcer, scheduler)
    return doc, cycler


def test_cursor_starts_before_first_landmark(page):
    _, cycler = page
    assert cycler.index == -1
    assert cycler.cycle(Direction.FORWARD).name == "Header"
    assert cycler.index == 0


def test_backward_from_start_lands_on_last(page):
    _, cycler = page
    assert cycler.cycle("backward").name == "Main content"
    assert cycler.index == 2


def test_shift_f6_first_press_lands_on_last_then_walks_back(page):
    doc, cycler = page
    cycler.bind(doc)
    doc.press_key("F6", shift=True)
    assert cycler.index == 2
    doc.press_key("F6", shift=True)
    assert cycler.index == 1
    doc.press_key("F6", shift=True)
    doc.press_key("F6", shift=True)
    assert cycler.index == 2


def test_forward_n_times_returns_to_start(page):
    _, cycler = page
    cycler.cycle()
    start = cycler.index
    for _ in range(len(NAMES)):
        cycler.cycle()
    assert cycler.index == start


def test_focuses_first_tab_order_descendant(page):
    doc, cycler = page
    cycler.cycle()
    cycler.cycle()
    assert doc.active_element.node_id == "nav-first"


def test_region_without_reachable_content_becomes_focusable(page):
    doc, cycler = page
    cycler.cycle("backward")
    main = doc.get_by_id("main-content")
    assert main.get_attribute("tabindex") == "-1"
    assert doc.active_element == main


def test_indicator_is_transient(page, scheduler):
    doc, cycler = page
    cycler.cycle()
    banner = doc.get_by_id("banner")
    assert banner.has_class(INDICATOR_CLASS)
    scheduler.advance(699)
    assert banner.has_class(INDICATOR_CLASS)
    scheduler.advance(1)
    assert not banner.has_class(INDICATOR_CLASS)


def test_announces_landmark_name(page, scheduler):
    doc, cycler = page
    cycler.cycle()
    cycler.cycle()
    scheduler.flush_paint()
    assert doc.get_by_id("live-region").text == "Navigation landmark"


def test_skip_predicate_suppresses_everything(scheduler):
    doc = build_document(PAGE)
    modal_open = True
    cycler = LandmarkCycler(
        [Landmark(doc.get_by_id("banner"), "Header")],
        Announcer(doc.get_by_id("live-region"), scheduler),
        scheduler,
        should_skip=lambda: modal_open,
    )
    assert cycler.cycle() is None
    assert cycler.index == -1
    assert doc.active_element is None
    assert scheduler.pending() == 0


def test_empty_registry_and_missing_elements_are_no_ops(scheduler):
    announcer = Announcer(None, scheduler)
    assert LandmarkCycler([], announcer, scheduler).cycle() is None
    cycler = LandmarkCycler([Landmark(None, "Ghost")], announcer, scheduler)
    assert cycler.cycle() is None
    assert cycler.index == 0


def test_mismatched_pairs_rejected(scheduler):
    with pytest.raises(ValueError):
        LandmarkCycler.from_pairs([None], ["a", "b"], Announcer(None, scheduler), scheduler)


def test_f6_binding_and_registry(page):
    doc, cycler = page
    registry = ShortcutRegistry()
    cycler.bind(doc, registry)
    event = doc.press_key("F6")
    assert event.default_prevented
    assert cycler.index == 0
    doc.press_key("F6", shift=True)
    assert cycler.index == 2
    assert {e.sequence for e in registry.list()} == {"F6", "Shift+F6"}
    cycler.unbind()
    doc.press_key("F6")
    assert cycler.index == 2
    assert registry.list() == []


def test_other_keys_ignored(page):
    doc, cycler = page
    cycler.bind(doc)
    event = doc.press_key("F7")
    assert not event.default_prevented
    assert cycler.index == -1


def test_independent_instances(scheduler):
    doc = build_document(PAGE)
    announcer = Announcer(None, scheduler)
    a = LandmarkCycler([Landmark(doc.get_by_id("banner"), "Header")] * 2, announcer, scheduler)
    b = LandmarkCycler([Landmark(doc.get_by_id("main-nav"), "Navigation")] * 3, announcer, scheduler)
    a.cycle()
    a.cycle()
    b.cycle()
    assert (a.index, b.index) == (1, 0)


def test_publishes_landmark_focused(scheduler):
    doc = build_document(PAGE)
    bus = EventBus()
    seen = []
    bus.subscribe(FocusEvent.LANDMARK_FOCUSED, lambda evt: seen.append(evt.payload))
    cycler = LandmarkCycler(
        [Landmark(doc.get_by_id("banner"), "Header")], Announcer(None, scheduler), scheduler, event_bus=bus
    )
    cycler.cycle()
    assert seen == [{"index": 0, "name": "Header"}]
