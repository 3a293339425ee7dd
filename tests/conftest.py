"""
Test configuration and shared fixtures for photo_strip.

This module defines reusable pytest fixtures for building sample
photos on disk, composition requests and engine configs.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
import datetime as dt
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from photo_strip.config import StripConfig
from photo_strip.constants import COLOR_MODE_RGB
from photo_strip.logging_utils import logger
from photo_strip.request import CompositionRequest

FIXED_DATE = dt.date(2024, 5, 17)

PHOTO_COLORS: list[tuple[int, int, int]] = [
    (220, 30, 30),
    (30, 200, 60),
    (40, 60, 220),
    (240, 220, 20),
    (200, 40, 200),
    (20, 200, 200),
    (250, 140, 20),
    (120, 60, 20),
    (90, 90, 90),
]


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample 400x300 red RGB PIL image."""
    return Image.new(COLOR_MODE_RGB, (400, 300), color="red")


@pytest.fixture
def make_photo_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory that saves a solid-colour PNG and returns its path."""

    def _make(
        color: tuple[int, int, int],
        *,
        size: tuple[int, int] = (400, 300),
        name: str | None = None,
    ) -> Path:
        file_name = name or "photo_{}_{}_{}.png".format(*color)
        path = tmp_path / file_name
        Image.new(COLOR_MODE_RGB, size, color).save(path)
        return path

    return _make


@pytest.fixture
def photo_paths(make_photo_file: Callable[..., Path]) -> list[Path]:
    """Four solid-colour 4:3 photos on disk."""
    return [make_photo_file(color) for color in PHOTO_COLORS[:4]]


@pytest.fixture
def make_request() -> Callable[..., CompositionRequest]:
    """
    Build CompositionRequest instances with layout overrides.

    The date is fixed so renders are reproducible.
    """

    def _build(
        photos: list[Any],
        *,
        decorations: list[Any] | None = None,
        **layout: Any,  # noqa: ANN401
    ) -> CompositionRequest:
        return CompositionRequest.create(
            photos,
            layout,
            decorations or [],
            date=FIXED_DATE,
        )

    return _build


@pytest.fixture
def strip_config() -> StripConfig:
    """Default engine config with a short load timeout for tests."""
    return StripConfig.model_validate({"loading": {"timeout_seconds": 5.0}})


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the package logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
