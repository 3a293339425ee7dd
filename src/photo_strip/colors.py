"""Colour parsing and the light/dark text selection rule."""

from __future__ import annotations

from PIL import ImageColor

from photo_strip.constants import (
    COLOR_BLACK,
    COLOR_WHITE,
    LUMA_WEIGHTS,
    LUMINANCE_THRESHOLD,
)
from photo_strip.type_defs import RGB


def parse_color(text: str) -> RGB:
    """
    Parse a colour string into an RGB triple.

    Accepts anything Pillow understands: ``#rgb``, ``#rrggbb``,
    ``#rrggbbaa`` (alpha dropped), ``rgb(...)`` and named colours.
    """
    try:
        value = ImageColor.getrgb(text.strip())
    except (AttributeError, ValueError) as exc:
        msg = f"Unrecognised colour: {text!r}"
        raise ValueError(msg) from exc
    red, green, blue = value[:3]
    return red, green, blue


def luminance(color: RGB) -> float:
    """Return perceived luminance of ``color`` in the range [0, 1]."""
    wr, wg, wb = LUMA_WEIGHTS
    red, green, blue = color
    return (wr * red + wg * green + wb * blue) / 255


def is_dark(color: RGB) -> bool:
    """Return True when light text reads better on ``color``."""
    return luminance(color) < LUMINANCE_THRESHOLD


def contrasting_text_color(background: RGB) -> RGB:
    """Pick white text for dark backgrounds and black text otherwise."""
    return COLOR_WHITE if is_dark(background) else COLOR_BLACK
