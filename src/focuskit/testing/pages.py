"""Markup builders for headless documents used in tests and demos."""

from __future__ import annotations

from typing import Tuple

from focuskit.dom.soup_document import SoupDocument

__all__ = ["box", "build_document", "WALKTHROUGH_CHROME"]


def box(top: float, left: float, width: float, height: float) -> str:
    """``data-rect`` attribute for an element laid out at the given box."""
    return f'data-rect="{top:g},{left:g},{width:g},{height:g}"'


# Overlay, spotlight and card controls in the id layout the walkthrough
# engine expects. The card is fixed so its placement is in viewport
# coordinates; the spotlight is absolutely positioned in page coordinates.
WALKTHROUGH_CHROME = f"""
<button id="wt-tour-btn" {box(10, 1100, 120, 32)}>Take the tour</button>
<div id="wt-overlay" aria-hidden="true" style="display: none" {box(0, 0, 1280, 800)}>
  <div id="wt-spotlight" {box(0, 0, 0, 0)}></div>
  <div id="wt-card" role="dialog" style="position: fixed" {box(0, 0, 420, 240)}>
    <button id="wt-close" {box(0, 0, 24, 24)}>Close tour</button>
    <span id="wt-step-counter"></span>
    <span id="wt-wcag-tag"></span>
    <h2 id="wt-title"></h2>
    <p id="wt-desc"></p>
    <p id="wt-impact"></p>
    <pre id="wt-sr-output"></pre>
    <div id="wt-progress"></div>
    <button id="wt-prev" {box(200, 10, 80, 30)}>Back</button>
    <button id="wt-next" {box(200, 320, 80, 30)}>Next</button>
  </div>
</div>
"""


def build_document(
    body: str,
    *,
    viewport: Tuple[float, float] = (1280, 800),
    page_height: float | None = None,
    live_region: bool = True,
) -> SoupDocument:
    """Wrap ``body`` in a page (with a ``#live-region`` unless disabled)."""
    region = '<div id="live-region" aria-live="polite"></div>' if live_region else ""
    markup = f"<html><body>{body}{region}</body></html>"
    return SoupDocument(markup, viewport=viewport, page_height=page_height)
