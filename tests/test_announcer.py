from focuskit.services import announcer as announcer_mod
from focuskit.services.announcer import Announcer, announce
from focuskit.services.event_bus import EventBus, FocusEvent
from focuskit.services.service_locator import services
from focuskit.testing import build_document


class RecordingRegion:
    def __init__(self):
        self.writes = []

    def set_text(self, value):
        self.writes.append(value)


def test_clear_then_write_after_paint(scheduler):
    region = RecordingRegion()
    a = Announcer(region, scheduler)
    a.announce("Drawer opened")
    assert region.writes == [""]
    scheduler.flush_paint()
    assert region.writes == ["", "Drawer opened"]


def test_repeated_identical_message_mutates_twice(scheduler):
    region = RecordingRegion()
    a = Announcer(region, scheduler)
    a.announce("Saved")
    scheduler.flush_paint()
    a.announce("Saved")
    scheduler.flush_paint()
    assert region.writes == ["", "Saved", "", "Saved"]


def test_overlapping_calls_last_write_wins(scheduler):
    region = RecordingRegion()
    a = Announcer(region, scheduler)
    a.announce("first")
    a.announce("second")
    scheduler.flush_paint()
    assert region.writes == ["", "", "first", "second"]


def test_writes_into_document_live_region(scheduler):
    doc = build_document("")
    region = doc.get_by_id("live-region")
    a = Announcer(region, scheduler)
    a.announce("Navigation landmark")
    assert region.text == ""
    scheduler.flush_paint()
    assert region.text == "Navigation landmark"


def test_missing_region_is_a_no_op(scheduler):
    a = Announcer(None, scheduler)
    a.announce("nobody hears this")
    assert scheduler.pending() == 0
    assert a.recent() == []


def test_history_and_event_publication(scheduler):
    bus = EventBus()
    seen = []
    bus.subscribe(FocusEvent.ANNOUNCEMENT, lambda evt: seen.append(evt.payload["message"]))
    a = Announcer(RecordingRegion(), scheduler, event_bus=bus, history=2)
    for msg in ("one", "two", "three"):
        a.announce(msg)
    assert a.recent() == ["two", "three"]
    assert seen == ["one", "two", "three"]


def test_module_level_announce_uses_registered_service(scheduler):
    region = RecordingRegion()
    services.register("announcer", Announcer(region, scheduler), allow_override=True)
    announce("Tour ended")
    scheduler.flush_paint()
    assert region.writes[-1] == "Tour ended"
    assert announcer_mod.get_announcer().recent() == ["Tour ended"]


def test_module_level_announce_without_service_does_not_raise():
    services.unregister("announcer")
    announce("dropped")
