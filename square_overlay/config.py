# config.py
"""
Application configuration constants for Square Overlay
"""

# Display box the canvas is fitted into
MAX_DISPLAY_WIDTH = 1280
MAX_DISPLAY_HEIGHT = 720

# Placement policy
PLACEMENT_MAX_ATTEMPTS = 100     # Retries before accepting an overlapping slot
WIDTH_RATIO = 0.66               # Square width as a fraction of its height

# Interaction policy
RESIZE_HANDLE_RADIUS = 10        # Half-side of the bottom-right grab zone

# Control ranges (size sliders hold tenths of display units)
SIZE_SLIDER_SCALE = 10
COUNT_MIN = 0
COUNT_MAX = 50
COUNT_DEFAULT = 5
SIZE_MIN = 1
SIZE_MAX = 30
MIN_SIZE_DEFAULT = 4
MAX_SIZE_DEFAULT = 8

# Overlay stroke
STROKE_COLOR = (255, 0, 0)
STROKE_WIDTH = 2

# Supported image formats
SUPPORTED_IMAGE_FORMATS = ['png', 'jpg', 'jpeg', 'bmp', 'webp', 'gif', 'tiff']

# Logging
LOG_FILENAME = "square_overlay.log"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUP_COUNT = 5

# Shortcuts
OPEN_SHORTCUT = "Ctrl+O"
PASTE_SHORTCUT = "Ctrl+V"
COPY_SHORTCUT = "Ctrl+Shift+C"
SAVE_SHORTCUT = "Ctrl+S"
CLOSE_SHORTCUT = "Ctrl+W"
SHUFFLE_SHORTCUT = "Ctrl+R"
