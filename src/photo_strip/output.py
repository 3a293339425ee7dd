"""Serialization of finished strips to encoded bytes and data URIs."""

from __future__ import annotations

import base64
import io
from typing import TYPE_CHECKING

from photo_strip.config_defaults import DEFAULT_JPEG_QUALITY
from photo_strip.constants import COLOR_MODE_RGB, COLOR_WHITE
from photo_strip.image_utils import to_rgb

if TYPE_CHECKING:
    from PIL import Image

    from photo_strip.type_defs import ImageFormat

_MIME_TYPES: dict[str, str] = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
}


def mime_type_for(fmt: ImageFormat) -> str:
    """Return the MIME type for an output format."""
    try:
        return _MIME_TYPES[fmt]
    except KeyError as exc:
        msg = f"Unsupported output format: {fmt!r}"
        raise ValueError(msg) from exc


def encode_image(
    image: Image.Image,
    fmt: ImageFormat = "PNG",
    *,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> bytes:
    """
    Encode ``image`` to bytes.

    JPEG output is flattened onto white first since it has no alpha.
    """
    mime_type_for(fmt)
    buffer = io.BytesIO()
    if fmt == "JPEG":
        rgb = to_rgb(image, bg_color=COLOR_WHITE)
        rgb.save(buffer, format="JPEG", quality=quality)
    else:
        out = image if image.mode in ("RGB", "RGBA") else image.convert(
            COLOR_MODE_RGB,
        )
        out.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Wrap encoded bytes in a base64 ``data:`` URI for inline embedding."""
    b64 = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{b64}"
