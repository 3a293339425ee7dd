"""
Strip composition: planning, loading, one draw pass and encoding.

The draw order is fixed: background, photos (border, filter, fit),
decorations, then footer text. :class:`StripCompositor` wraps this in a
small state machine and tags every request with a generation number so
results from superseded requests are never published.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from PIL import Image, ImageDraw

from photo_strip.assets import AssetLoader, LoadedAssets
from photo_strip.colors import contrasting_text_color
from photo_strip.config import StripConfig
from photo_strip.constants import (
    COLOR_ERROR_TEXT,
    COLOR_MODE_RGB,
    COLOR_PLACEHOLDER_BG,
    COLOR_WHITE,
    DATE_ALPHA,
    FONT_MONO,
    FONT_SANS,
    FONT_SANS_BOLD,
    PLACEHOLDER_SIZE,
    PLACEHOLDER_TITLE,
)
from photo_strip.errors import InvalidConfigError, SurfaceUnavailableError
from photo_strip.filters import apply_filter
from photo_strip.fit import fit_image
from photo_strip.footer import active_footer_elements, plan_footer
from photo_strip.geometry import CanvasPlan, compute_layout
from photo_strip.image_utils import draw_border, paste_with_alpha
from photo_strip.logging_utils import logger
from photo_strip.output import encode_image, mime_type_for, to_data_uri
from photo_strip.request import CompositionRequest
from photo_strip.typography import draw_centered_text, load_font

if TYPE_CHECKING:
    import datetime as dt
    from collections.abc import Iterable, Mapping

    from photo_strip.request import Decoration
    from photo_strip.type_defs import RGB, PhotoSource

_PLACEHOLDER_TITLE_PX = 22
_PLACEHOLDER_DETAIL_PX = 14
_PLACEHOLDER_DETAIL_MAX_CHARS = 56
_PLACEHOLDER_OUTLINE_PX = 4


class ComposeState(Enum):
    """Lifecycle of the most recent composition request."""

    IDLE = "idle"
    LOADING = "loading"
    DRAWING = "drawing"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class RenderedStrip:
    """Finished output of one request: the raster and its encoding."""

    image: Image.Image
    data: bytes
    mime_type: str
    generation: int = 0
    error: str | None = None
    failed_photos: tuple[int, ...] = ()
    failed_decorations: tuple[int, ...] = ()

    @property
    def ok(self) -> bool:
        """False when this is a diagnostic placeholder."""
        return self.error is None

    @property
    def data_uri(self) -> str:
        """Encoded image as an inline ``data:`` URI."""
        return to_data_uri(self.data, self.mime_type)


def create_surface(size: tuple[int, int], color: RGB) -> Image.Image:
    """Create the RGB drawing surface for one request."""
    width, height = size
    if width <= 0 or height <= 0:
        msg = f"Cannot create a {width}x{height} drawing surface"
        raise SurfaceUnavailableError(msg)
    try:
        return Image.new(COLOR_MODE_RGB, (width, height), color)
    except (MemoryError, OSError, ValueError) as exc:
        msg = f"Cannot create a {width}x{height} drawing surface: {exc}"
        raise SurfaceUnavailableError(msg) from exc


def plan_canvas(
    request: CompositionRequest,
    config: StripConfig,
) -> CanvasPlan:
    """Compute the canvas plan for a request under ``config``."""
    return compute_layout(
        len(request.photos),
        config.canvas.width,
        request.layout.margin_px,
        request.layout.columns,
        footer_height=config.canvas.footer_height,
    )


def _draw_photos(
    canvas: Image.Image,
    request: CompositionRequest,
    plan: CanvasPlan,
    assets: LoadedAssets,
) -> None:
    layout = request.layout
    for rect, result in zip(plan.photo_rects, assets.photos):
        if result.image is None:
            logger.debug("Photo %d slot left empty", result.index)
            continue
        if layout.show_border:
            draw_border(canvas, rect, plan.total_width)
        fitted, origin = fit_image(result.image, rect)
        # Filtered copy is local to this photo; nothing carries over.
        filtered = apply_filter(fitted, layout.filter)
        paste_with_alpha(canvas, filtered, origin)


def _draw_decorations(
    canvas: Image.Image,
    request: CompositionRequest,
    plan: CanvasPlan,
    assets: LoadedAssets,
) -> None:
    for decoration, result in zip(request.decorations, assets.decorations):
        if result.image is None:
            continue
        img = result.image
        size = (
            max(1, round(img.width * decoration.scale)),
            max(1, round(img.height * decoration.scale)),
        )
        scaled = img.resize(size, Image.Resampling.LANCZOS)
        origin = (
            round((plan.total_width - size[0]) / 2),
            round(plan.footer_top + (plan.footer_height - size[1]) / 2),
        )
        paste_with_alpha(canvas, scaled, origin)


def _draw_footer(
    canvas: Image.Image,
    request: CompositionRequest,
    plan: CanvasPlan,
    config: StripConfig,
) -> None:
    layout = request.layout
    caption = layout.caption
    elements = active_footer_elements(
        has_caption=caption is not None,
        show_date=layout.show_date,
    )
    slots = plan_footer(
        plan.footer_height, elements, footer_top=plan.footer_top,
    )
    text_rgb = contrasting_text_color(layout.background_rgb)
    center_x = plan.total_width / 2
    footer = config.footer

    for slot in slots:
        center = (center_x, slot.center_y)
        if slot.element == "caption" and caption is not None:
            font = load_font(caption.font, caption.size)
            draw_centered_text(
                canvas, center, caption.text, font, caption.rgb,
            )
        elif slot.element == "date":
            font = load_font(FONT_MONO, footer.date_font_size)
            text = request.stamp_date().strftime(footer.date_format)
            draw_centered_text(
                canvas, center, text, font, (*text_rgb, DATE_ALPHA),
            )
        elif slot.element == "watermark":
            font = load_font(FONT_SANS_BOLD, footer.watermark_font_size)
            draw_centered_text(
                canvas, center, footer.watermark_text, font, text_rgb,
            )


def _check_scale(scale: float) -> None:
    if not (math.isfinite(scale) and scale > 0):
        msg = f"Render scale must be positive and finite, got {scale}"
        raise InvalidConfigError(msg)


def render_strip(
    request: CompositionRequest,
    plan: CanvasPlan,
    assets: LoadedAssets,
    config: StripConfig,
    *,
    scale: float = 1.0,
) -> Image.Image:
    """
    Run the synchronous draw pass and return the finished raster.

    Photos whose assets failed to load leave their slot showing the
    background. A ``scale`` other than 1 resizes the finished strip,
    e.g. for preview thumbnails.

    Raises:
        InvalidConfigError: If ``scale`` is not a positive number.
        SurfaceUnavailableError: If the canvas cannot be allocated.

    """
    _check_scale(scale)
    canvas = create_surface(plan.size, request.layout.background_rgb)
    _draw_photos(canvas, request, plan, assets)
    _draw_decorations(canvas, request, plan, assets)
    _draw_footer(canvas, request, plan, config)
    if scale == 1:
        return canvas
    size = (
        max(1, round(canvas.width * scale)),
        max(1, round(canvas.height * scale)),
    )
    return canvas.resize(size, Image.Resampling.LANCZOS)


def render_placeholder(message: str) -> Image.Image:
    """Build a small diagnostic image that shows ``message``."""
    width, height = PLACEHOLDER_SIZE
    img = Image.new(COLOR_MODE_RGB, PLACEHOLDER_SIZE, COLOR_PLACEHOLDER_BG)
    inset = _PLACEHOLDER_OUTLINE_PX // 2
    ImageDraw.Draw(img).rectangle(
        [inset, inset, width - 1 - inset, height - 1 - inset],
        outline=COLOR_ERROR_TEXT,
        width=_PLACEHOLDER_OUTLINE_PX,
    )
    detail = message
    if len(detail) > _PLACEHOLDER_DETAIL_MAX_CHARS:
        detail = detail[: _PLACEHOLDER_DETAIL_MAX_CHARS - 3] + "..."
    draw_centered_text(
        img,
        (width / 2, height * 0.4),
        PLACEHOLDER_TITLE,
        load_font(FONT_SANS_BOLD, _PLACEHOLDER_TITLE_PX),
        COLOR_ERROR_TEXT,
    )
    draw_centered_text(
        img,
        (width / 2, height * 0.6),
        detail,
        load_font(FONT_SANS, _PLACEHOLDER_DETAIL_PX),
        COLOR_WHITE,
    )
    return img


def _placeholder_result(
    message: str,
    generation: int,
    assets: LoadedAssets,
) -> RenderedStrip:
    image = render_placeholder(message)
    return RenderedStrip(
        image=image,
        data=encode_image(image, "PNG"),
        mime_type=mime_type_for("PNG"),
        generation=generation,
        error=message,
        failed_photos=assets.failed_photos,
        failed_decorations=assets.failed_decorations,
    )


def draw_and_encode(
    request: CompositionRequest,
    plan: CanvasPlan,
    assets: LoadedAssets,
    config: StripConfig,
    *,
    generation: int = 0,
    scale: float = 1.0,
) -> RenderedStrip:
    """
    Draw and encode a strip, degrading to a placeholder on failure.

    Surface and encoder failures never escape; they are logged and
    reported through :attr:`RenderedStrip.error`.
    """
    started = time.perf_counter()
    fmt = config.output.format
    try:
        image = render_strip(request, plan, assets, config, scale=scale)
        data = encode_image(image, fmt, quality=config.output.jpeg_quality)
    except (SurfaceUnavailableError, MemoryError, OSError) as exc:
        logger.exception("Strip render failed (generation %d)", generation)
        return _placeholder_result(str(exc), generation, assets)

    logger.debug(
        "Rendered %dx%d strip in %.3fs",
        image.width, image.height, time.perf_counter() - started,
    )
    return RenderedStrip(
        image=image,
        data=data,
        mime_type=mime_type_for(fmt),
        generation=generation,
        failed_photos=assets.failed_photos,
        failed_decorations=assets.failed_decorations,
    )


def _make_loader(config: StripConfig) -> AssetLoader:
    return AssetLoader(
        timeout_seconds=config.loading.timeout_seconds,
        max_workers=config.loading.max_workers,
    )


def compose_strip(
    request: CompositionRequest,
    config: StripConfig | None = None,
    *,
    loader: AssetLoader | None = None,
    scale: float = 1.0,
) -> RenderedStrip:
    """
    Compose one strip from start to finish.

    Raises:
        InvalidConfigError: If the request cannot be laid out or
            ``scale`` is not a positive number.

    """
    _check_scale(scale)
    cfg = config or StripConfig.model_validate({})
    plan = plan_canvas(request, cfg)
    assets = (loader or _make_loader(cfg)).load_all(
        request.photos, [d.source for d in request.decorations],
    )
    return draw_and_encode(request, plan, assets, cfg, scale=scale)


class StripCompositor:
    """
    Stateful front end that keeps only the newest request's result.

    Each :meth:`compose` call takes the next generation number. If a
    newer call starts while an older one is still loading or drawing,
    the older call's output is discarded instead of published.
    """

    def __init__(
        self,
        config: StripConfig | None = None,
        *,
        loader: AssetLoader | None = None,
    ) -> None:
        self.config = config or StripConfig.model_validate({})
        self.loader = loader or _make_loader(self.config)
        self._lock = threading.Lock()
        self._generation = 0
        self._state = ComposeState.IDLE
        self._latest: RenderedStrip | None = None

    @property
    def state(self) -> ComposeState:
        """State of the newest request."""
        with self._lock:
            return self._state

    @property
    def latest(self) -> RenderedStrip | None:
        """Most recently published result, if any."""
        with self._lock:
            return self._latest

    @property
    def generation(self) -> int:
        """Generation number of the newest request."""
        with self._lock:
            return self._generation

    def make_request(
        self,
        photos: Iterable[PhotoSource],
        layout: Mapping[str, Any] | None = None,
        decorations: Iterable[Decoration | Mapping[str, Any]] = (),
        *,
        date: dt.date | None = None,
    ) -> CompositionRequest:
        """Build a request whose layout starts from this config's layout."""
        return CompositionRequest.create(
            photos,
            layout,
            decorations,
            date=date,
            base_layout=self.config.layout,
        )

    def is_current(self, generation: int) -> bool:
        """True when no newer request has started since ``generation``."""
        with self._lock:
            return generation == self._generation

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            self._state = ComposeState.IDLE
            return self._generation

    def _transition(self, generation: int, state: ComposeState) -> bool:
        with self._lock:
            if generation != self._generation:
                return False
            self._state = state
            return True

    def _publish(self, result: RenderedStrip) -> bool:
        with self._lock:
            if result.generation != self._generation:
                return False
            self._latest = result
            self._state = (
                ComposeState.READY if result.ok else ComposeState.FAILED
            )
            return True

    def compose(self, request: CompositionRequest) -> RenderedStrip | None:
        """
        Compose ``request`` and publish it as the latest result.

        Returns the published result, or None when a newer request
        superseded this one before it finished.

        Raises:
            InvalidConfigError: If the request cannot be laid out.

        """
        plan = plan_canvas(request, self.config)
        generation = self._begin()
        logger.debug(
            "Generation %d: %d photo(s) on %dx%d canvas",
            generation, len(request.photos), *plan.size,
        )

        if not self._transition(generation, ComposeState.LOADING):
            return self._discard(generation)
        assets = self.loader.load_all(
            request.photos, [d.source for d in request.decorations],
        )

        if not self._transition(generation, ComposeState.DRAWING):
            return self._discard(generation)
        result = draw_and_encode(
            request, plan, assets, self.config, generation=generation,
        )

        if not self._publish(result):
            return self._discard(generation)
        logger.info(
            "Published strip generation %d (%d failed photo(s))",
            generation, len(result.failed_photos),
        )
        return result

    @staticmethod
    def _discard(generation: int) -> None:
        logger.warning("Discarding stale strip generation %d", generation)
