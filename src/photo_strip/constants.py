"""
Constants used internally by the photo strip compositor.

These are implementation-level values that should not be overridden
via config files or request parameters.
"""

# Grid cells are always 4:3, whatever the source photo ratio
CELL_ASPECT_RATIO = 4 / 3

# Photo set bounds
MIN_PHOTOS = 1
MAX_PHOTOS = 9

# Caption length limit
CAPTION_MAX_CHARS = 40

# Border sizing: max(BORDER_MIN_PX, BORDER_SCALE * rect_width / canvas_width)
BORDER_MIN_PX = 2
BORDER_SCALE = 5

# Footer band vertical padding, as a fraction of its height
FOOTER_PADDING_FRACTION = 0.1

# Text colour selection
LUMINANCE_THRESHOLD = 0.5
LUMA_WEIGHTS = (0.299, 0.587, 0.114)
DATE_ALPHA = 128

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_MODE_RGBA = "RGBA"
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_PLACEHOLDER_BG = (48, 48, 48)
COLOR_ERROR_TEXT = (255, 92, 92)

# Diagnostic placeholder
PLACEHOLDER_SIZE = (480, 240)
PLACEHOLDER_TITLE = "Could not render photo strip"

# Font files tried in order before Pillow's built-in font
FONT_SANS = "DejaVuSans.ttf"
FONT_SANS_BOLD = "DejaVuSans-Bold.ttf"
FONT_MONO = "DejaVuSansMono.ttf"
