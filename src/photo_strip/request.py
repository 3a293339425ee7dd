"""Validated composition requests."""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from photo_strip.config import LayoutConfig
from photo_strip.constants import MAX_PHOTOS, MIN_PHOTOS
from photo_strip.errors import InvalidConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from photo_strip.type_defs import PhotoSource


@dataclass(frozen=True, slots=True)
class Decoration:
    """A decorative overlay drawn over the footer band."""

    source: PhotoSource
    scale: float = 1.0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.scale) and self.scale > 0):
            msg = (
                "Decoration scale must be positive and finite, "
                f"got {self.scale}"
            )
            raise InvalidConfigError(msg)


def _coerce_layout(
    layout: LayoutConfig | Mapping[str, Any] | None,
    base: LayoutConfig | None,
) -> LayoutConfig:
    """Build a LayoutConfig, reporting validation errors as InvalidConfig."""
    if isinstance(layout, LayoutConfig):
        return layout
    fields = base.model_dump() if base is not None else {}
    fields.update(layout or {})
    try:
        return LayoutConfig.model_validate(fields)
    except ValidationError as exc:
        msg = f"Invalid layout: {exc}"
        raise InvalidConfigError(msg) from exc


def _coerce_decoration(item: Decoration | Mapping[str, Any]) -> Decoration:
    if isinstance(item, Decoration):
        return item
    try:
        return Decoration(source=item["source"], scale=item.get("scale", 1.0))
    except KeyError as exc:
        msg = "Decoration mapping needs a 'source' key"
        raise InvalidConfigError(msg) from exc


@dataclass(frozen=True, slots=True)
class CompositionRequest:
    """
    Everything one strip render depends on.

    Requests are immutable; any change to photos, layout or decorations
    means building a new request. ``date`` fixes the stamped date so
    repeated renders are pixel-identical.
    """

    photos: tuple[PhotoSource, ...]
    layout: LayoutConfig = field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    decorations: tuple[Decoration, ...] = ()
    date: dt.date | None = None

    def __post_init__(self) -> None:
        count = len(self.photos)
        if not MIN_PHOTOS <= count <= MAX_PHOTOS:
            msg = (
                f"A strip needs {MIN_PHOTOS}-{MAX_PHOTOS} photos, "
                f"got {count}"
            )
            raise InvalidConfigError(msg)

    @classmethod
    def create(
        cls,
        photos: Iterable[PhotoSource],
        layout: LayoutConfig | Mapping[str, Any] | None = None,
        decorations: Iterable[Decoration | Mapping[str, Any]] = (),
        *,
        date: dt.date | None = None,
        base_layout: LayoutConfig | None = None,
    ) -> CompositionRequest:
        """
        Validate loosely typed inputs into a request.

        Layout and decorations may be given as plain mappings. A mapping
        layout only overrides the fields it names; the rest come from
        ``base_layout`` (typically ``StripConfig.layout``) or the
        built-in defaults. Any validation problem is raised as
        :class:`InvalidConfigError`.
        """
        return cls(
            photos=tuple(photos),
            layout=_coerce_layout(layout, base_layout),
            decorations=tuple(_coerce_decoration(d) for d in decorations),
            date=date,
        )

    def stamp_date(self) -> dt.date:
        """Date printed in the footer; today when none was fixed."""
        return self.date or dt.datetime.now().astimezone().date()
