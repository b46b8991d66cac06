"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WEEKLY_INTERVAL_RANGE = (1, 52)
MONTHLY_INTERVAL_RANGE = (1, 12)

DAILY_MIN_SPAN_DAYS = 1
WEEKLY_MIN_SPAN_DAYS = 7
MONTHLY_MIN_SPAN_DAYS = 30

DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_HALF_DAY_THRESHOLD_MINUTES = 240

# Shift override offsets applied when an override is created without values.
DEFAULT_CLOCK_IN_START_OFFSET = "00:00"
DEFAULT_CLOCK_IN_END_OFFSET = "02:00"
DEFAULT_CLOCK_OUT_START_OFFSET = "-01:00"
DEFAULT_CLOCK_OUT_END_OFFSET = "01:00"

MAX_FACE_CONFIDENCE = 100.0
MINUTES_PER_DAY = 24 * 60
