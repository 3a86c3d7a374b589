from focuskit.services.positioner import FloatingPositioner
from focuskit.services.tooltip_service import TooltipBinder
from focuskit.testing import box, build_document

PAGE = f"""
<div class="metric-card">
  <button class="has-tooltip" id="info" aria-describedby="tip-info" {box(400, 440, 24, 24)}>
    i<span class="tooltip" role="tooltip" id="tip-info" style="position: fixed" {box(0, 0, 200, 50)}>Count of items</span>
  </button>
  <button class="has-tooltip" id="edge" {box(5, 5, 24, 24)}>
    e<span class="tooltip" role="tooltip" id="tip-edge" style="position: fixed" {box(0, 0, 200, 50)}>Edge</span>
  </button>
</div>
<span class="tooltip" id="orphan" {box(0, 0, 10, 10)}>no trigger</span>
"""


def _binder(scheduler):
    doc = build_document(PAGE, viewport=(1000, 800))
    binder = TooltipBinder(doc, FloatingPositioner(doc, scheduler))
    return doc, binder


def test_bind_counts_only_tooltips_with_triggers(scheduler):
    _, binder = _binder(scheduler)
    assert binder.bind() == 2


def test_hover_positions_tooltip(scheduler):
    doc, binder = _binder(scheduler)
    binder.bind()
    doc.hover(doc.get_by_id("info"))
    tip = doc.get_by_id("tip-info")
    assert tip.get_attribute("data-placement") == "top"
    assert tip.style("top") == f"{400 - 8 - 50:g}px"
    assert tip.style("left") == f"{452 - 100:g}px"


def test_focus_positions_tooltip_and_flips_near_edge(scheduler):
    doc, binder = _binder(scheduler)
    binder.bind()
    doc.get_by_id("edge").focus()
    tip = doc.get_by_id("tip-edge")
    assert tip.get_attribute("data-placement") == "right"
    assert tip.has_class("tooltip--right")
    assert doc.scroll_log == []


def test_orphan_tooltip_untouched_and_unbind(scheduler):
    doc, binder = _binder(scheduler)
    binder.bind()
    assert doc.get_by_id("orphan").get_attribute("data-placement") is None
    binder.unbind()
    doc.hover(doc.get_by_id("info"))
    assert doc.get_by_id("tip-info").get_attribute("data-placement") is None


def test_rebinding_does_not_duplicate_listeners(scheduler):
    doc, binder = _binder(scheduler)
    binder.bind()
    binder.bind()
    assert doc.get_by_id("info").listener_count("mouseenter") == 1
