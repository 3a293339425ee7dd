"""Vertical slot layout for caption, date stamp and watermark."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from photo_strip.constants import FOOTER_PADDING_FRACTION

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photo_strip.type_defs import FooterElement

_ORDER: tuple[FooterElement, ...] = ("caption", "date", "watermark")


@dataclass(frozen=True)
class FooterSlot:
    """Vertical centre of one footer element on the canvas."""

    element: FooterElement
    center_y: float


def active_footer_elements(
    *,
    has_caption: bool,
    show_date: bool,
) -> tuple[FooterElement, ...]:
    """Return the active elements in draw order; watermark is always last."""
    active: list[FooterElement] = []
    if has_caption:
        active.append("caption")
    if show_date:
        active.append("date")
    active.append("watermark")
    return tuple(active)


def _validate_elements(elements: Sequence[FooterElement]) -> None:
    if not elements or elements[-1] != "watermark":
        msg = "Footer elements must end with 'watermark'"
        raise ValueError(msg)
    if len(set(elements)) != len(elements):
        msg = f"Footer elements must be unique, got {list(elements)}"
        raise ValueError(msg)
    unknown = set(elements) - set(_ORDER)
    if unknown:
        msg = f"Unknown footer elements: {sorted(unknown)}"
        raise ValueError(msg)


def plan_footer(
    footer_height: float,
    elements: Sequence[FooterElement],
    *,
    footer_top: float = 0.0,
) -> tuple[FooterSlot, ...]:
    """
    Split the footer band into evenly sized slots, one per element.

    Ten percent of the band height is kept free at the top and at the
    bottom; the rest is divided evenly and each element sits at the
    centre of its slot.
    """
    _validate_elements(elements)
    padding = FOOTER_PADDING_FRACTION * footer_height
    slot_height = (footer_height - 2 * padding) / len(elements)
    return tuple(
        FooterSlot(element, footer_top + padding + (i + 0.5) * slot_height)
        for i, element in enumerate(elements)
    )
