"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

UNKNOWN_LOCATION = "Unknown location"
ZERO_DISTANCE = "0 m"

DEFAULT_MAX_IMAGE_KB = 10
DEFAULT_TOKEN_MAX_AGE_DAYS = 30
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
MIN_PASSWORD_LENGTH = 6
MAX_IMAGE_PIXELS = 40_000_000
