"""
Configuration schema and loader for the photo strip compositor.

Defines Pydantic models for the per-request layout and the engine
settings, and a TOML-based loader with validation support.
"""

from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, field_validator

from photo_strip.colors import parse_color
from photo_strip.config_defaults import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CAPTION_COLOR,
    DEFAULT_CAPTION_FONT,
    DEFAULT_CAPTION_SIZE,
    DEFAULT_COLUMNS,
    DEFAULT_DATE_FONT_SIZE,
    DEFAULT_DATE_FORMAT,
    DEFAULT_FILTER,
    DEFAULT_FOOTER_HEIGHT,
    DEFAULT_IMAGE_FORMAT,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_LOAD_TIMEOUT_SECONDS,
    DEFAULT_MARGIN_PX,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SHOW_BORDER,
    DEFAULT_SHOW_DATE,
    DEFAULT_WATERMARK_FONT_SIZE,
    DEFAULT_WATERMARK_TEXT,
    SINGLE_FOOTER_HEIGHT,
    SINGLE_MARGIN_PX,
)
from photo_strip.constants import CAPTION_MAX_CHARS
from photo_strip.type_defs import RGB, FilterName, ImageFormat, ProfileName


def _check_color(value: str) -> str:
    """Raise ValueError for colour strings Pillow cannot parse."""
    parse_color(value)
    return value


class CaptionConfig(BaseModel):
    """Caption text and its appearance."""

    text: str = Field(min_length=1, max_length=CAPTION_MAX_CHARS)
    font: str = DEFAULT_CAPTION_FONT
    size: int = Field(DEFAULT_CAPTION_SIZE, gt=0)
    color: str = DEFAULT_CAPTION_COLOR

    @field_validator("color")
    @classmethod
    def check_color(cls, value: str) -> str:
        """Reject unparseable caption colours."""
        return _check_color(value)

    @property
    def rgb(self) -> RGB:
        """Caption colour as an RGB triple."""
        return parse_color(self.color)


class LayoutConfig(BaseModel):
    """Per-request grid and style parameters."""

    margin_px: int = Field(DEFAULT_MARGIN_PX, ge=0)
    columns: int = Field(DEFAULT_COLUMNS, ge=1)
    show_border: bool = DEFAULT_SHOW_BORDER
    background_color: str = DEFAULT_BACKGROUND_COLOR
    filter: FilterName = DEFAULT_FILTER
    show_date: bool = DEFAULT_SHOW_DATE
    caption: CaptionConfig | None = None

    @field_validator("background_color")
    @classmethod
    def check_background(cls, value: str) -> str:
        """Reject unparseable background colours."""
        return _check_color(value)

    @property
    def background_rgb(self) -> RGB:
        """Background colour as an RGB triple."""
        return parse_color(self.background_color)


class CanvasConfig(BaseModel):
    """Fixed canvas dimensions."""

    width: int = Field(DEFAULT_CANVAS_WIDTH, ge=1)
    footer_height: int = Field(DEFAULT_FOOTER_HEIGHT, ge=0)


class LoadingConfig(BaseModel):
    """Asset loading limits."""

    timeout_seconds: float = Field(DEFAULT_LOAD_TIMEOUT_SECONDS, gt=0)
    max_workers: int = Field(DEFAULT_MAX_WORKERS, ge=1)


class FooterConfig(BaseModel):
    """Date stamp and watermark appearance."""

    watermark_text: str = Field(DEFAULT_WATERMARK_TEXT, min_length=1)
    date_format: str = DEFAULT_DATE_FORMAT
    date_font_size: int = Field(DEFAULT_DATE_FONT_SIZE, gt=0)
    watermark_font_size: int = Field(DEFAULT_WATERMARK_FONT_SIZE, gt=0)


class OutputConfig(BaseModel):
    """Encoding of the finished strip."""

    format: ImageFormat = DEFAULT_IMAGE_FORMAT
    jpeg_quality: int = Field(DEFAULT_JPEG_QUALITY, ge=1, le=100)


class StripConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of a strip TOML file. ``layout`` supplies the
    defaults a request starts from when it does not carry its own.
    """

    canvas: CanvasConfig = Field(
        default_factory=lambda: CanvasConfig.model_validate({}),
    )
    loading: LoadingConfig = Field(
        default_factory=lambda: LoadingConfig.model_validate({}),
    )
    footer: FooterConfig = Field(
        default_factory=lambda: FooterConfig.model_validate({}),
    )
    output: OutputConfig = Field(
        default_factory=lambda: OutputConfig.model_validate({}),
    )
    layout: LayoutConfig = Field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )

    @classmethod
    def for_profile(cls, profile: ProfileName) -> "StripConfig":
        """
        Return the preset for a product flow.

        ``"strip"`` is the multi-photo strip; ``"single"`` is the tighter
        single-result frame with a shorter footer and one column.
        """
        if profile == "strip":
            return cls.model_validate({})
        if profile == "single":
            return cls.model_validate({
                "canvas": {"footer_height": SINGLE_FOOTER_HEIGHT},
                "layout": {"margin_px": SINGLE_MARGIN_PX, "columns": 1},
            })
        msg = f"Unknown profile {profile!r}; expected 'strip' or 'single'"
        raise ValueError(msg)


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> StripConfig:
        """
        Load a strip configuration from a TOML file.

        Returns a validated StripConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return StripConfig.model_validate(doc.unwrap())
