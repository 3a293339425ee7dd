"""Font loading and centred text drawing for the footer band."""

from __future__ import annotations

from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

from photo_strip.constants import FONT_SANS
from photo_strip.logging_utils import logger

_FontT = ImageFont.FreeTypeFont | ImageFont.ImageFont
_FONT_SUFFIX = ".ttf"


def _candidates(name: str) -> list[str]:
    """Font file names to try for ``name``, most specific first."""
    names = [name]
    if not name.lower().endswith((".ttf", ".otf", ".ttc")):
        names.append(name + _FONT_SUFFIX)
    if FONT_SANS not in names:
        names.append(FONT_SANS)
    return names


@lru_cache(maxsize=32)
def load_font(name: str, px: int) -> _FontT:
    """
    Load a font by file name or path at the given pixel size; cached.

    Falls back to DejaVu Sans and finally to Pillow's built-in font so
    text always renders, even on hosts with no font files installed.
    """
    for candidate in _candidates(name):
        try:
            return ImageFont.truetype(candidate, px)
        except OSError:
            continue
    logger.debug("Font %r unavailable, using Pillow default", name)
    return ImageFont.load_default(size=px)


def draw_centered_text(
    canvas: Image.Image,
    center: tuple[float, float],
    text: str,
    font: _FontT,
    fill: tuple[int, ...],
) -> None:
    """Draw ``text`` centred on ``center``; RGBA fills are blended."""
    draw = ImageDraw.Draw(canvas, "RGBA")
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = center[0] - (left + right) / 2
    y = center[1] - (top + bottom) / 2
    draw.text((round(x), round(y)), text, font=font, fill=fill)
