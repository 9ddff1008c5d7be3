"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EMBEDDING_DIMENSIONS = 128
EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_LATE_THRESHOLD_HOUR = 9
DEFAULT_MATCH_THRESHOLD = 0.6
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_SCAN_RETRY_ATTEMPTS = 3

LATE_THRESHOLD_KEY = "lateThreshold"
