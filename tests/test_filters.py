"""Tests for the named photo filters."""

from __future__ import annotations

import pytest
from PIL import Image, ImageChops

from photo_strip.filters import FILTER_CHAINS, FILTER_NAMES, apply_filter

MID_GREY = (128, 128, 128)


def _solid(color: tuple[int, ...], mode: str = "RGB") -> Image.Image:
    return Image.new(mode, (8, 6), color)


def test_every_filter_name_has_a_chain() -> None:
    """The public filter names and the chain table agree."""
    assert set(FILTER_NAMES) == set(FILTER_CHAINS)
    assert {"Normal", "Warm", "Cool", "Vintage", "B&W", "Dramatic"} <= set(
        FILTER_NAMES,
    )


def test_normal_returns_identical_copy(sample_image: Image.Image) -> None:
    """Normal leaves pixels untouched but never returns the input."""
    out = apply_filter(sample_image, "Normal")
    assert out is not sample_image
    assert ImageChops.difference(out, sample_image).getbbox() is None


@pytest.mark.parametrize("name", FILTER_NAMES)
def test_filters_do_not_mutate_input(name: str) -> None:
    """The source image is unchanged after filtering."""
    src = _solid((200, 120, 40))
    before = src.copy()
    apply_filter(src, name)
    assert ImageChops.difference(src, before).getbbox() is None


@pytest.mark.parametrize("name", FILTER_NAMES)
def test_filters_are_deterministic(name: str) -> None:
    """Running a filter twice gives pixel-identical output."""
    src = _solid((10, 180, 240))
    first = apply_filter(src, name)
    second = apply_filter(src, name)
    assert ImageChops.difference(first, second).getbbox() is None


def test_black_and_white_is_grey() -> None:
    """B&W output has equal channels."""
    r, g, b = apply_filter(_solid((220, 30, 30)), "B&W").getpixel((0, 0))
    assert r == g == b


def test_warm_adds_sepia_tone() -> None:
    """Warm pushes a neutral grey towards red/yellow."""
    r, g, b = apply_filter(_solid(MID_GREY), "Warm").getpixel((0, 0))
    assert r > b
    assert g > b


def test_dramatic_darkens_mid_grey() -> None:
    """Dramatic's contrast plus brightness pulls mid grey down."""
    r, g, b = apply_filter(_solid(MID_GREY), "Dramatic").getpixel((0, 0))
    assert r == g == b
    assert r < MID_GREY[0]


def test_muted_reduces_saturation() -> None:
    """Muted narrows the spread between channels."""
    src = (200, 60, 60)
    r, g, b = apply_filter(_solid(src), "Muted").getpixel((0, 0))
    assert (r - g) < (src[0] - src[1])


def test_alpha_is_preserved() -> None:
    """Filters keep RGBA mode and leave the alpha channel untouched."""
    src = _solid((200, 100, 50, 90), mode="RGBA")
    out = apply_filter(src, "Vintage")
    assert out.mode == "RGBA"
    assert out.getpixel((0, 0))[3] == 90  # noqa: PLR2004


def test_rgb_stays_rgb() -> None:
    """Opaque inputs come back as RGB."""
    assert apply_filter(_solid((1, 2, 3)), "Cool").mode == "RGB"
    assert apply_filter(_solid(128, mode="L"), "Warm").mode == "RGB"


def test_unknown_filter_rejected(sample_image: Image.Image) -> None:
    """Unknown names raise ValueError listing the valid choices."""
    with pytest.raises(ValueError, match="Unknown filter 'Sparkle'"):
        apply_filter(sample_image, "Sparkle")
