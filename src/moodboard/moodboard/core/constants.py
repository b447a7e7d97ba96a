"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7

DEFAULT_PAGE_TITLE = "Untitled"
DEFAULT_PAGE_ICON = "📄"
DEFAULT_PAGE_TEMPLATE = "note"
TEMP_BLOCK_PREFIX = "temp-"

MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9
MIN_OBJECT_SIZE = 100
AUTO_HEIGHT_FALLBACK = 100

TYPING_TTL_SECONDS = 5

TITLE_CONTEXT_BLOCKS = 10
TITLE_MAX_LENGTH = 50
