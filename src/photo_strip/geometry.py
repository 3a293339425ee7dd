"""
Grid geometry for photo strips.

Turns a photo count, canvas width, margin and column count into one
rectangle per photo plus the total canvas height. Cells are always
4:3; the last row is centred when it holds fewer photos than columns.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from photo_strip.config_defaults import DEFAULT_FOOTER_HEIGHT
from photo_strip.constants import CELL_ASPECT_RATIO
from photo_strip.errors import InvalidConfigError


@dataclass(frozen=True)
class PhotoRect:
    """Placement of one photo on the canvas, in canvas pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge."""
        return self.y + self.height

    def box(self) -> tuple[int, int, int, int]:
        """Return the rounded ``(x0, y0, x1, y1)`` pixel box."""
        return (
            round(self.x),
            round(self.y),
            round(self.right),
            round(self.bottom),
        )

    def inflate(self, amount: float) -> PhotoRect:
        """Return a copy grown by ``amount`` on every side."""
        return PhotoRect(
            self.x - amount,
            self.y - amount,
            self.width + 2 * amount,
            self.height + 2 * amount,
        )

    def overlaps(self, other: PhotoRect) -> bool:
        """Return True when the interiors of both rectangles intersect."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


@dataclass(frozen=True)
class CanvasPlan:
    """Full canvas geometry for one composition request."""

    total_width: int
    total_height: float
    footer_height: int
    photo_rects: tuple[PhotoRect, ...]

    @property
    def footer_top(self) -> float:
        """Y coordinate where the footer band starts."""
        return self.total_height - self.footer_height

    @property
    def size(self) -> tuple[int, int]:
        """Integer canvas size suitable for ``Image.new``."""
        return self.total_width, round(self.total_height)


def _validate(
    photo_count: int,
    canvas_width: int,
    margin_px: float,
    columns: int,
    footer_height: int,
) -> None:
    """Reject inputs that would produce empty or negative geometry."""
    if photo_count < 1:
        msg = f"photo_count must be at least 1, got {photo_count}"
        raise InvalidConfigError(msg)
    if columns < 1:
        msg = f"columns must be at least 1, got {columns}"
        raise InvalidConfigError(msg)
    if margin_px < 0:
        msg = f"margin_px must not be negative, got {margin_px}"
        raise InvalidConfigError(msg)
    if canvas_width <= 0:
        msg = f"canvas_width must be positive, got {canvas_width}"
        raise InvalidConfigError(msg)
    if footer_height < 0:
        msg = f"footer_height must not be negative, got {footer_height}"
        raise InvalidConfigError(msg)


def compute_layout(
    photo_count: int,
    canvas_width: int,
    margin_px: float,
    columns: int,
    *,
    footer_height: int = DEFAULT_FOOTER_HEIGHT,
) -> CanvasPlan:
    """
    Compute photo rectangles and canvas height for a grid of photos.

    The same margin is used as the outer margin and the gap between
    cells, so ``margin_px=0`` gives edge-to-edge photos.

    Args:
        photo_count: Number of photos to place (at least 1).
        canvas_width: Fixed canvas width in pixels.
        margin_px: Outer margin and inter-photo gap.
        columns: Number of grid columns.
        footer_height: Height of the footer band at the bottom.

    Returns:
        The canvas plan with one rectangle per photo in index order.

    Raises:
        InvalidConfigError: If any argument is out of range or the
            margins leave no room for photos.

    """
    _validate(photo_count, canvas_width, margin_px, columns, footer_height)

    outer_margin = margin_px
    rows = math.ceil(photo_count / columns)
    available_width = canvas_width - 2 * outer_margin
    photo_width = (available_width - margin_px * (columns - 1)) / columns
    if photo_width <= 0:
        msg = (
            f"margin_px={margin_px} leaves no room for {columns} column(s) "
            f"on a {canvas_width}px canvas"
        )
        raise InvalidConfigError(msg)
    photo_height = photo_width / CELL_ASPECT_RATIO

    canvas_height = (
        2 * outer_margin
        + rows * photo_height
        + margin_px * (rows - 1)
        + footer_height
    )

    photos_in_last_row = photo_count - (rows - 1) * columns
    last_row_width = (
        photos_in_last_row * photo_width
        + (photos_in_last_row - 1) * margin_px
    )

    rects: list[PhotoRect] = []
    for i in range(photo_count):
        row, col = divmod(i, columns)
        row_x_offset = 0.0
        if row == rows - 1 and photos_in_last_row < columns:
            row_x_offset = (available_width - last_row_width) / 2
        x = outer_margin + row_x_offset + col * (photo_width + margin_px)
        y = outer_margin + row * (photo_height + margin_px)
        rects.append(PhotoRect(x, y, photo_width, photo_height))

    return CanvasPlan(
        total_width=canvas_width,
        total_height=canvas_height,
        footer_height=footer_height,
        photo_rects=tuple(rects),
    )
