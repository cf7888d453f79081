"""Constants and defaults.

Note: Keep policy numbers here; settings modules may override them.
"""

SHIFT_WINDOW_HOURS = 12
STANDARD_WORKDAY_HOURS = 9
LUNCH_BREAK_HOURS = 1
REPORT_TIMEOUT_SECONDS = 30

RECORD_SIZE = 40
TIME_FORMAT = "%H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
