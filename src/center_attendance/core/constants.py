"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Africa/Cairo"

SESSION_DURATION_MINUTES = 120

# Attendance may be marked from 30 minutes before start until 45 minutes after.
MARK_WINDOW_BEFORE_MINUTES = 30
MARK_WINDOW_AFTER_MINUTES = 45

EARTH_RADIUS_M = 6_371_000.0

DEFAULT_RADIUS_M = 30
MIN_RADIUS_M = 1
MAX_RADIUS_M = 500

MAX_NAME_LENGTH = 150
MAX_SUBJECT_LENGTH = 150
MAX_ADDRESS_LENGTH = 255
MAX_NOTES_LENGTH = 500
MAX_DELETION_REASON_LENGTH = 200

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_ADMIN_LIST_LIMIT = 200
