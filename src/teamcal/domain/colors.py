from __future__ import annotations

import re
from typing import NamedTuple

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

BACKGROUND_OPACITY = 0.15
DARK_TEXT = "#1F2937"
LIGHT_TEXT = "#FFFFFF"


class Rgb(NamedTuple):
    r: int
    g: int
    b: int


def hex_to_rgb(color: str) -> Rgb:
    """Convert ``#rrggbb`` (hash optional) to components; anything else maps to black."""

    match = _HEX_PATTERN.match(color or "")
    if not match:
        return Rgb(0, 0, 0)
    return Rgb(*(int(part, 16) for part in match.groups()))


def event_background(color: str) -> str:
    rgb = hex_to_rgb(color)
    return f"rgba({rgb.r}, {rgb.g}, {rgb.b}, {BACKGROUND_OPACITY})"


def event_text_color(color: str) -> str:
    rgb = hex_to_rgb(color)
    brightness = (rgb.r * 299 + rgb.g * 587 + rgb.b * 114) / 1000
    return DARK_TEXT if brightness > 128 else LIGHT_TEXT
