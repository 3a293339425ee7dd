"""
Named colour and tone filters applied to individual photos.

Each filter is a chain of steps modelled on the CSS filter functions
(sepia, grayscale, saturate, hue-rotate, brightness, contrast). Steps run
on float RGB values in [0, 1] and are clamped after each one. Alpha is
left untouched. Filters never mutate their input.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, get_args

import numpy as np
from PIL import Image

from photo_strip.constants import COLOR_MODE_RGB, COLOR_MODE_RGBA
from photo_strip.type_defs import FilterName

if TYPE_CHECKING:
    from collections.abc import Callable

_Step = tuple[str, float]

FILTER_NAMES: tuple[str, ...] = get_args(FilterName)

FILTER_CHAINS: dict[str, tuple[_Step, ...]] = {
    "Normal": (),
    "Warm": (("sepia", 0.3), ("brightness", 1.05)),
    "Cool": (
        ("brightness", 1.1),
        ("contrast", 1.1),
        ("saturate", 1.25),
        ("hue_rotate", -10.0),
    ),
    "Vintage": (("sepia", 0.5), ("brightness", 0.9), ("contrast", 1.1)),
    "B&W": (("grayscale", 1.0),),
    "Dramatic": (("contrast", 1.25), ("brightness", 0.9)),
    "Vivid": (("saturate", 1.5), ("contrast", 1.1), ("brightness", 1.05)),
    "Muted": (("saturate", 0.5), ("brightness", 1.1)),
}


def _sepia_matrix(amount: float) -> np.ndarray:
    a = 1 - min(1.0, max(0.0, amount))
    return np.array([
        [0.393 + 0.607 * a, 0.769 - 0.769 * a, 0.189 - 0.189 * a],
        [0.349 - 0.349 * a, 0.686 + 0.314 * a, 0.168 - 0.168 * a],
        [0.272 - 0.272 * a, 0.534 - 0.534 * a, 0.131 + 0.869 * a],
    ])


def _grayscale_matrix(amount: float) -> np.ndarray:
    a = 1 - min(1.0, max(0.0, amount))
    return np.array([
        [0.2126 + 0.7874 * a, 0.7152 - 0.7152 * a, 0.0722 - 0.0722 * a],
        [0.2126 - 0.2126 * a, 0.7152 + 0.2848 * a, 0.0722 - 0.0722 * a],
        [0.2126 - 0.2126 * a, 0.7152 - 0.7152 * a, 0.0722 + 0.9278 * a],
    ])


def _saturate_matrix(s: float) -> np.ndarray:
    return np.array([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ])


def _hue_rotate_matrix(degrees: float) -> np.ndarray:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return np.array([
        [
            0.213 + c * 0.787 - s * 0.213,
            0.715 - c * 0.715 - s * 0.715,
            0.072 - c * 0.072 + s * 0.928,
        ],
        [
            0.213 - c * 0.213 + s * 0.143,
            0.715 + c * 0.285 + s * 0.140,
            0.072 - c * 0.072 - s * 0.283,
        ],
        [
            0.213 - c * 0.213 - s * 0.787,
            0.715 - c * 0.715 + s * 0.715,
            0.072 + c * 0.928 + s * 0.072,
        ],
    ])


_MATRIX_STEPS: dict[str, Callable[[float], np.ndarray]] = {
    "sepia": _sepia_matrix,
    "grayscale": _grayscale_matrix,
    "saturate": _saturate_matrix,
    "hue_rotate": _hue_rotate_matrix,
}


def _apply_step(rgb: np.ndarray, step: str, value: float) -> np.ndarray:
    """Apply one filter step to an ``(H, W, 3)`` float array."""
    if step == "brightness":
        out = rgb * value
    elif step == "contrast":
        out = (rgb - 0.5) * value + 0.5
    else:
        out = rgb @ _MATRIX_STEPS[step](value).T
    return np.clip(out, 0.0, 1.0)


def apply_filter(image: Image.Image, name: str) -> Image.Image:
    """
    Return a filtered copy of ``image``.

    Args:
        image: Source image in any mode.
        name: One of :data:`FILTER_NAMES`.

    Returns:
        A new image. "Normal" returns a plain copy; other filters
        return RGBA when the input carries alpha and RGB otherwise.

    Raises:
        ValueError: If ``name`` is not a known filter.

    """
    try:
        chain = FILTER_CHAINS[name]
    except KeyError as exc:
        msg = f"Unknown filter {name!r}; expected one of {FILTER_NAMES}"
        raise ValueError(msg) from exc

    has_alpha = image.mode in ("RGBA", "LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )
    if not chain:
        return image.copy()

    rgba = image.convert(COLOR_MODE_RGBA)
    arr = np.asarray(rgba, dtype=np.float32)
    rgb = arr[..., :3] / 255.0
    for step, value in chain:
        rgb = _apply_step(rgb, step, value)

    out = np.empty_like(arr, dtype=np.uint8)
    out[..., :3] = np.rint(rgb * 255.0).astype(np.uint8)
    out[..., 3] = arr[..., 3].astype(np.uint8)
    result = Image.fromarray(out)
    return result if has_alpha else result.convert(COLOR_MODE_RGB)
