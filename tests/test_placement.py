import itertools

import pytest

from focuskit.design.placement import clamp, needs_scroll, place, place_centered
from focuskit.dom.geometry import Rect, Size, Viewport

VP = Viewport(1000, 800)
GAP, MARGIN = 8, 10


def test_prefers_top_when_centered_fit():
    ref = Rect(top=400, left=450, width=100, height=30)
    p = place(ref, Size(200, 60), VP, gap=GAP, margin=MARGIN)
    assert p.side == "top"
    assert p.top == 400 - GAP - 60
    assert p.left == 500 - 100
    assert p.arrow == 100


def test_falls_back_to_bottom_when_no_room_above():
    ref = Rect(top=20, left=450, width=100, height=30)
    p = place(ref, Size(200, 60), VP, gap=GAP, margin=MARGIN)
    assert p.side == "bottom"
    assert p.top == ref.bottom + GAP


def test_right_when_vertical_sides_cannot_center():
    # Reference hugs the left edge: centered box would cross the margin.
    ref = Rect(top=400, left=0, width=40, height=40)
    p = place(ref, Size(200, 60), VP, gap=GAP, margin=MARGIN)
    assert p.side == "right"
    assert p.left == ref.right + GAP
    assert p.top == ref.center_y - 30


def test_left_when_only_left_has_room():
    ref = Rect(top=400, left=960, width=40, height=40)
    p = place(ref, Size(200, 60), VP, gap=GAP, margin=MARGIN)
    assert p.side == "left"
    assert p.left == ref.left - GAP - 200


def test_forced_bottom_when_nothing_fits():
    vp = Viewport(300, 200)
    ref = Rect(top=50, left=0, width=300, height=100)
    p = place(ref, Size(280, 180), vp, gap=GAP, margin=MARGIN)
    assert p.side == "bottom"
    # Still clamped into the margins (as far as the size allows).
    assert p.left == MARGIN
    assert p.top == MARGIN


def test_arrow_tracks_reference_when_box_is_clamped():
    # Near the top-left corner: no centered fit, so it goes right and the
    # box is pushed down to the margin.
    ref = Rect(top=5, left=5, width=30, height=20)
    p = place(ref, Size(100, 300), VP, gap=GAP, margin=MARGIN)
    assert p.side == "right"
    assert p.top == MARGIN
    assert p.arrow == pytest.approx(ref.center_y - MARGIN)


def test_off_screen_reference_centers_the_element():
    for ref in (Rect(-500, 100, 50, 50), Rect(100, 2000, 50, 50), Rect(900, 100, 50, 50)):
        p = place(ref, Size(200, 100), VP, gap=GAP, margin=MARGIN)
        assert p.centered
        assert (p.top, p.left) == (350, 400)
        assert p.arrow is None


def test_zero_size_is_deterministic():
    ref = Rect(400, 450, 100, 30)
    first = place(ref, Size(0, 0), VP, gap=GAP, margin=MARGIN)
    second = place(ref, Size(0, 0), VP, gap=GAP, margin=MARGIN)
    assert first == second
    assert first.side == "top"


@pytest.mark.parametrize(
    "ref",
    [
        Rect(top, left, w, h)
        for top, left, (w, h) in itertools.product(
            (0, 15, 200, 390, 760), (0, 12, 480, 900, 990), ((10, 10), (120, 40), (600, 300))
        )
        if left + w <= VP.width and top + h <= VP.height
    ],
)
@pytest.mark.parametrize("size", [Size(50, 20), Size(300, 120), Size(980, 780)])
def test_result_always_within_margins(ref, size):
    p = place(ref, size, VP, gap=GAP, margin=MARGIN)
    assert MARGIN <= p.left and p.left + p.width <= VP.width - MARGIN
    assert MARGIN <= p.top and p.top + p.height <= VP.height - MARGIN


def test_place_centered_and_clamp():
    p = place_centered(Size(100, 50), Viewport(300, 150))
    assert (p.top, p.left, p.side) == (50, 100, "center")
    assert clamp(5, 10, 20) == 10
    assert clamp(25, 10, 20) == 20
    assert clamp(15, 20, 10) == 20  # inverted range: low wins


def test_needs_scroll_threshold():
    assert needs_scroll(Rect(30, 0, 10, 10), VP, 60)
    assert needs_scroll(Rect(760, 0, 10, 10), VP, 60)
    assert not needs_scroll(Rect(300, 0, 10, 10), VP, 60)
