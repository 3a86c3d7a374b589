import pytest

from focuskit.dom.events import KeyEvent
from focuskit.services.shortcut_registry import ShortcutRegistry, normalize_sequence


def test_register_and_list_shortcuts():
    reg = ShortcutRegistry()
    assert reg.register("search.focus", "Ctrl+K", "Focus search", category="Navigation")
    assert not reg.register("search.focus", "Ctrl+Shift+K", "Duplicate id")
    entries = reg.list()
    assert len(entries) == 1 and entries[0].sequence == "Ctrl+K"
    assert reg.get("search.focus").description == "Focus search"
    assert reg.get("missing") is None


def test_by_category_sorted_by_sequence():
    reg = ShortcutRegistry()
    reg.register("landmark.previous", "Shift+F6", "Previous landmark", "Navigation")
    reg.register("landmark.next", "F6", "Next landmark", "Navigation")
    reg.register("help.toggle", "?", "Toggle help", "Help")
    cats = reg.by_category()
    assert [e.sequence for e in cats["Navigation"]] == ["F6", "Shift+F6"]
    assert [e.shortcut_id for e in cats["Help"]] == ["help.toggle"]


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("ctrl+k", "Ctrl+K"),
        ("shift+f6", "Shift+F6"),
        ("Shift+Ctrl+k", "Ctrl+Shift+K"),
        ("cmd+k", "Meta+K"),
        ("escape", "Escape"),
        ("?", "?"),
        ("Ctrl++", "Ctrl++"),
    ],
)
def test_normalize_sequence(raw, expected):
    assert normalize_sequence(raw) == expected


@pytest.mark.parametrize("raw", ["Hyper+K", "Ctrl+", ""])
def test_normalize_sequence_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        normalize_sequence(raw)


def test_conflicts_use_normalised_sequences():
    reg = ShortcutRegistry()
    reg.register("a.one", "Ctrl+K", "One")
    reg.register("a.two", "ctrl+k", "Two")
    reg.register("a.three", "F6", "Three")
    conflicts = reg.find_conflicts()
    assert list(conflicts) == ["Ctrl+K"]
    assert [e.shortcut_id for e in conflicts["Ctrl+K"]] == ["a.one", "a.two"]


def test_match_compares_against_key_event_sequence():
    reg = ShortcutRegistry()
    reg.register("landmark.next", "F6", "Next landmark")
    reg.register("landmark.previous", "shift+F6", "Previous landmark")
    reg.register("search.focus", "Ctrl+K", "Focus search")
    assert [e.shortcut_id for e in reg.match(KeyEvent(key="F6", shift=True))] == ["landmark.previous"]
    assert [e.shortcut_id for e in reg.match(KeyEvent(key="k", ctrl=True))] == ["search.focus"]
    assert reg.match(KeyEvent(key="k")) == []


def test_release_drops_only_that_owners_entries():
    reg = ShortcutRegistry()
    cycler, shortcuts = object(), object()
    reg.register("landmark.next", "F6", "Next landmark", owner=cycler)
    reg.register("landmark.previous", "Shift+F6", "Previous landmark", owner=cycler)
    reg.register("search.focus", "Ctrl+K", "Focus search", owner=shortcuts)
    assert reg.release(cycler) == 2
    assert [e.shortcut_id for e in reg.list()] == ["search.focus"]
    assert reg.release(cycler) == 0
    assert reg.unregister("search.focus")
    assert not reg.unregister("search.focus")
