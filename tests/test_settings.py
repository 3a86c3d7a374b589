import logging

from focuskit.config import settings as cfg
from focuskit.config.settings import FocusSettings, load_settings


def test_defaults_match_documented_constants():
    s = FocusSettings()
    assert (s.tooltip_gap, s.tooltip_margin) == (8, 10)
    assert (s.card_gap, s.card_margin, s.card_max_width) == (16, 16, 420)
    assert s.card_fallback_height == 400
    assert s.spotlight_pad == 8
    assert s.scroll_edge_threshold == 60
    assert s.scroll_settle_ms == 400
    assert s.spotlight_delay_ms == 350
    assert s.landmark_indicator_ms == cfg.LANDMARK_INDICATOR_MS == 700
    assert s.scroll_behavior == "smooth"


def test_round_trip_dict_ignores_unknown_keys():
    data = FocusSettings(tooltip_gap=4).to_dict()
    data["unknown"] = 1
    restored = FocusSettings.from_dict(data)
    assert restored.tooltip_gap == 4
    assert restored == FocusSettings(tooltip_gap=4)


def test_environment_overrides():
    s = load_settings(
        {
            "FOCUSKIT_SCROLL_SETTLE_MS": "250",
            "FOCUSKIT_TOOLTIP_GAP": "6.5",
            "FOCUSKIT_SMOOTH_SCROLL": "0",
        }
    )
    assert s.scroll_settle_ms == 250
    assert s.tooltip_gap == 6.5
    assert s.smooth_scroll is False
    assert s.scroll_behavior == "auto"


def test_invalid_and_negative_overrides_fall_back(caplog):
    with caplog.at_level(logging.WARNING, logger="focuskit.config.settings"):
        s = load_settings({"FOCUSKIT_SPOTLIGHT_PAD": "wide", "FOCUSKIT_CARD_GAP": "-3"})
    assert s.spotlight_pad == 8
    assert s.card_gap == 16
    assert "FOCUSKIT_SPOTLIGHT_PAD" in caplog.text
    assert "FOCUSKIT_CARD_GAP" in caplog.text


def test_int_field_rejects_float_text():
    s = load_settings({"FOCUSKIT_LANDMARK_INDICATOR_MS": "1.5"})
    assert s.landmark_indicator_ms == 700
