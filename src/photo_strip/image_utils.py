"""Small Pillow helpers shared by the compositor and the encoder."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from photo_strip.constants import (
    BORDER_MIN_PX,
    BORDER_SCALE,
    COLOR_MODE_RGB,
    COLOR_WHITE,
)

if TYPE_CHECKING:
    from photo_strip.geometry import PhotoRect
    from photo_strip.type_defs import RGB


def to_rgb(img: Image.Image, *, bg_color: RGB) -> Image.Image:
    """Convert PIL image to RGB, alpha compositing if needed."""
    if img.mode == "RGB":
        return img
    if img.mode in ("RGBA", "LA"):
        bg = Image.new("RGBA", img.size, (*bg_color, 255))
        comp = Image.alpha_composite(bg, img.convert("RGBA"))
        return comp.convert(COLOR_MODE_RGB)
    return img.convert(COLOR_MODE_RGB)


def paste_with_alpha(
    canvas: Image.Image,
    img: Image.Image,
    origin: tuple[int, int],
) -> None:
    """Paste ``img`` at ``origin``, using its alpha channel when present."""
    if img.mode == "RGBA":
        canvas.paste(img, origin, mask=img)
    else:
        canvas.paste(img, origin)


def border_width(rect_width: float, canvas_width: int) -> float:
    """Border thickness proportional to the photo's share of the canvas."""
    return max(BORDER_MIN_PX, BORDER_SCALE * rect_width / canvas_width)


def draw_border(
    canvas: Image.Image,
    rect: PhotoRect,
    canvas_width: int,
) -> None:
    """Fill a white frame around ``rect`` before the photo is drawn."""
    frame = rect.inflate(border_width(rect.width, canvas_width))
    x0, y0, x1, y1 = frame.box()
    draw = ImageDraw.Draw(canvas)
    draw.rectangle([x0, y0, x1 - 1, y1 - 1], fill=COLOR_WHITE)
