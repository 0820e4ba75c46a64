"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TOLERANCE_MINUTES = 10
DEFAULT_NIGHT_START = time(22, 0)
DEFAULT_NIGHT_END = time(5, 0)
DEFAULT_BANK_EXPIRATION_MONTHS = 6
DEFAULT_HISTORY_LIMIT = 200

# CLT art. 73 §1: the night hour lasts 52min30s.
NIGHT_HOUR_FACTOR = 60 / 52.5

AFD_MIN_LINE_LENGTH = 10
AFD_PUNCH_RECORD_TYPE = "3"
