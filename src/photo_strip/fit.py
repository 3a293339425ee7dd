"""Aspect-preserving placement of an image inside a target rectangle."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import Image

if TYPE_CHECKING:
    from photo_strip.geometry import PhotoRect

# Aspects closer than this are treated as equal (no letterboxing)
_ASPECT_REL_TOL = 1e-9


@dataclass(frozen=True)
class FitRegion:
    """Fitted draw size and offset relative to the target's top-left."""

    draw_w: float
    draw_h: float
    offset_x: float
    offset_y: float


def fit_region(
    source_w: float,
    source_h: float,
    target: PhotoRect,
) -> FitRegion:
    """
    Scale a source uniformly so it is fully visible inside ``target``.

    Wider sources fill the target width and are centred vertically;
    taller (or equal) sources fill the target height and are centred
    horizontally. Nothing is cropped.
    """
    if source_w <= 0 or source_h <= 0:
        msg = f"Source size must be positive, got {source_w}x{source_h}"
        raise ValueError(msg)
    if target.width <= 0 or target.height <= 0:
        msg = (
            "Target size must be positive, got "
            f"{target.width}x{target.height}"
        )
        raise ValueError(msg)

    source_aspect = source_w / source_h
    target_aspect = target.width / target.height
    if math.isclose(source_aspect, target_aspect, rel_tol=_ASPECT_REL_TOL):
        return FitRegion(target.width, target.height, 0.0, 0.0)
    if source_aspect > target_aspect:
        draw_w = target.width
        draw_h = target.width / source_aspect
        return FitRegion(draw_w, draw_h, 0.0, (target.height - draw_h) / 2)
    draw_h = target.height
    draw_w = target.height * source_aspect
    return FitRegion(draw_w, draw_h, (target.width - draw_w) / 2, 0.0)


def fit_image(
    image: Image.Image,
    target: PhotoRect,
) -> tuple[Image.Image, tuple[int, int]]:
    """Resize ``image`` into ``target`` and return it with its paste origin."""
    region = fit_region(image.width, image.height, target)
    size = (max(1, round(region.draw_w)), max(1, round(region.draw_h)))
    resized = image.resize(size, Image.Resampling.LANCZOS)
    origin = (
        round(target.x + region.offset_x),
        round(target.y + region.offset_y),
    )
    return resized, origin
