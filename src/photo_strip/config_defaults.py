"""Shared default values for user-facing configuration settings."""
from photo_strip.type_defs import FilterName, ImageFormat

# Canvas
DEFAULT_CANVAS_WIDTH = 1200
DEFAULT_FOOTER_HEIGHT = 200

# Layout
DEFAULT_MARGIN_PX = 25
DEFAULT_COLUMNS = 1
DEFAULT_SHOW_BORDER = True
DEFAULT_BACKGROUND_COLOR = "#FFFFFF"
DEFAULT_FILTER: FilterName = "Normal"
DEFAULT_SHOW_DATE = True

# Caption
DEFAULT_CAPTION_FONT = "DejaVuSans.ttf"
DEFAULT_CAPTION_SIZE = 28
DEFAULT_CAPTION_COLOR = "#FF4081"

# Footer
DEFAULT_WATERMARK_TEXT = "IdolBooth"
DEFAULT_DATE_FORMAT = "%m/%d/%Y"
DEFAULT_DATE_FONT_SIZE = 20
DEFAULT_WATERMARK_FONT_SIZE = 26

# Loading
DEFAULT_LOAD_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_WORKERS = 9

# Output
DEFAULT_IMAGE_FORMAT: ImageFormat = "PNG"
DEFAULT_JPEG_QUALITY = 95

# "single result" preset
SINGLE_MARGIN_PX = 20
SINGLE_FOOTER_HEIGHT = 120
