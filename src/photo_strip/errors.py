"""
Error types raised by the photo strip compositor.

Asset and surface failures are absorbed inside the engine and turned
into degraded output; only invalid configuration reaches the caller.
"""

from __future__ import annotations


class PhotoStripError(Exception):
    """Base exception for all compositor errors."""


class InvalidConfigError(PhotoStripError, ValueError):
    """Raised when layout or request parameters fail validation."""


class AssetLoadError(PhotoStripError, OSError):
    """Raised when a photo or decoration source cannot be decoded."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Could not load '{source}': {reason}")
        self.source = source
        self.reason = reason


class SurfaceUnavailableError(PhotoStripError, RuntimeError):
    """Raised when a drawing surface cannot be created."""
