"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Brazilian CLT vacation splitting (art. 134)
DEFAULT_ANNUAL_CAP_DAYS = 30
DEFAULT_MIN_SPLIT_DAYS = 5
DEFAULT_LONG_SPLIT_DAYS = 14

# Vacation must start before acquisitive end + N months
CONCESSIVE_PERIOD_MONTHS = 11

DEFAULT_LIST_LIMIT = 200
DEFAULT_PENDING_LIMIT = 500

# Seconds to wait for another request of the same employee to finish
EMPLOYEE_LOCK_TIMEOUT_SECONDS = 10
