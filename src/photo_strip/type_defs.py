"""
Defines shared type aliases for the photo strip compositor.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from pathlib import Path
from typing import Literal, Union

from PIL import Image

FilterName = Literal[
    "Normal", "Warm", "Cool", "Vintage", "B&W", "Dramatic", "Vivid", "Muted",
]
FooterElement = Literal["caption", "date", "watermark"]
AssetKind = Literal["photo", "decoration"]
ImageFormat = Literal["PNG", "JPEG"]
ProfileName = Literal["strip", "single"]

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

# A path, an http(s) URL, a data: URI, raw encoded bytes or a decoded image
PhotoSource = Union[str, Path, bytes, Image.Image]
