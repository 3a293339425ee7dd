"""Public package exports for the photo strip compositor."""

from __future__ import annotations

from .assets import AssetLoader, AssetResult, LoadedAssets
from .compositor import (
    ComposeState,
    RenderedStrip,
    StripCompositor,
    compose_strip,
)
from .config import (
    CaptionConfig,
    ConfigLoader,
    LayoutConfig,
    StripConfig,
)
from .errors import (
    AssetLoadError,
    InvalidConfigError,
    PhotoStripError,
    SurfaceUnavailableError,
)
from .fit import FitRegion, fit_region
from .footer import FooterSlot, plan_footer
from .geometry import CanvasPlan, PhotoRect, compute_layout
from .request import CompositionRequest, Decoration

__all__ = [
    "AssetLoadError",
    "AssetLoader",
    "AssetResult",
    "CanvasPlan",
    "CaptionConfig",
    "ComposeState",
    "CompositionRequest",
    "ConfigLoader",
    "Decoration",
    "FitRegion",
    "FooterSlot",
    "InvalidConfigError",
    "LayoutConfig",
    "LoadedAssets",
    "PhotoRect",
    "PhotoStripError",
    "RenderedStrip",
    "StripCompositor",
    "StripConfig",
    "SurfaceUnavailableError",
    "compose_strip",
    "compute_layout",
    "fit_region",
    "plan_footer",
]
