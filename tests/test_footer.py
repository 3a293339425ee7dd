"""Tests for footer slot layout."""

from __future__ import annotations

import itertools

import pytest

from photo_strip.footer import active_footer_elements, plan_footer

FOOTER_H = 200
FOOTER_TOP = 1000


def test_all_elements_evenly_spaced() -> None:
    """Caption, date and watermark sit at evenly spaced slot centres."""
    slots = plan_footer(
        FOOTER_H,
        ("caption", "date", "watermark"),
        footer_top=FOOTER_TOP,
    )
    assert [s.element for s in slots] == ["caption", "date", "watermark"]

    centers = [s.center_y for s in slots]
    gaps = [b - a for a, b in itertools.pairwise(centers)]
    assert all(gap > 0 for gap in gaps)
    assert gaps[0] == pytest.approx(gaps[1])

    slot_h = (FOOTER_H - 2 * 0.1 * FOOTER_H) / 3
    assert centers[0] == pytest.approx(FOOTER_TOP + 20 + slot_h / 2)


def test_watermark_only_is_centred() -> None:
    """A lone watermark sits in the middle of the band."""
    (slot,) = plan_footer(FOOTER_H, ("watermark",), footer_top=FOOTER_TOP)
    assert slot.center_y == pytest.approx(FOOTER_TOP + FOOTER_H / 2)


def test_slots_stay_inside_padding() -> None:
    """All centres fall between the top and bottom padding."""
    slots = plan_footer(FOOTER_H, ("date", "watermark"), footer_top=0)
    for slot in slots:
        assert 0.1 * FOOTER_H < slot.center_y < 0.9 * FOOTER_H


@pytest.mark.parametrize(
    ("has_caption", "show_date", "expected"),
    [
        (True, True, ("caption", "date", "watermark")),
        (True, False, ("caption", "watermark")),
        (False, True, ("date", "watermark")),
        (False, False, ("watermark",)),
    ],
)
def test_active_elements_order(
    *,
    has_caption: bool,
    show_date: bool,
    expected: tuple[str, ...],
) -> None:
    """Watermark is always present and always last."""
    assert active_footer_elements(
        has_caption=has_caption, show_date=show_date,
    ) == expected


@pytest.mark.parametrize(
    "elements",
    [
        (),
        ("caption", "date"),
        ("watermark", "date"),
        ("date", "date", "watermark"),
    ],
)
def test_invalid_element_sequences(elements: tuple[str, ...]) -> None:
    """Sequences without a trailing watermark or with repeats fail."""
    with pytest.raises(ValueError, match="Footer elements"):
        plan_footer(FOOTER_H, elements)  # type: ignore[arg-type]
