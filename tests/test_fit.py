"""Tests for aspect-fit placement."""

from __future__ import annotations

import pytest
from PIL import Image

from photo_strip.fit import FitRegion, fit_image, fit_region
from photo_strip.geometry import PhotoRect

SQUARE = PhotoRect(0, 0, 100, 100)


def test_equal_aspect_has_no_offset() -> None:
    """Matching aspects fill the target exactly."""
    region = fit_region(400, 300, PhotoRect(0, 0, 800, 600))
    assert region == FitRegion(800, 600, 0.0, 0.0)


def test_equal_aspect_from_layout_cell() -> None:
    """A 4:3 source in a computed 4:3 cell is not letterboxed."""
    cell = PhotoRect(25, 25, 562.5, 562.5 / (4 / 3))
    region = fit_region(4000, 3000, cell)
    assert region.offset_x == 0
    assert region.offset_y == 0


def test_wide_source_is_centred_vertically() -> None:
    """Wider sources take the full width and are letterboxed top/bottom."""
    region = fit_region(200, 100, SQUARE)
    assert region.draw_w == pytest.approx(100)
    assert region.draw_h == pytest.approx(50)
    assert region.offset_x == 0
    assert region.offset_y == pytest.approx(25)


def test_tall_source_is_centred_horizontally() -> None:
    """Taller sources take the full height and are pillarboxed."""
    region = fit_region(100, 200, SQUARE)
    assert region.draw_w == pytest.approx(50)
    assert region.draw_h == pytest.approx(100)
    assert region.offset_x == pytest.approx(25)
    assert region.offset_y == 0


def test_fit_is_pure() -> None:
    """Repeated calls with the same inputs return equal results."""
    target = PhotoRect(3, 7, 333, 111)
    results = {fit_region(640, 480, target) for _ in range(5)}
    assert len(results) == 1


@pytest.mark.parametrize(("w", "h"), [(0, 10), (10, 0), (-5, 5)])
def test_non_positive_source_rejected(w: int, h: int) -> None:
    """Empty sources cannot be fitted."""
    with pytest.raises(ValueError, match="Source size"):
        fit_region(w, h, SQUARE)


def test_empty_target_rejected() -> None:
    """Empty targets cannot be fitted."""
    with pytest.raises(ValueError, match="Target size"):
        fit_region(10, 10, PhotoRect(0, 0, 0, 10))


def test_fit_image_resizes_and_positions() -> None:
    """fit_image returns the resized image and its absolute origin."""
    img = Image.new("RGB", (200, 100), "blue")
    fitted, origin = fit_image(img, PhotoRect(10, 20, 100, 100))
    assert fitted.size == (100, 50)
    assert origin == (10, 45)
    assert img.size == (200, 100)
