"""Constants for taskrepeat.

This module centralizes fixed values used throughout the package.
"""

# Days in one week step
DAYS_PER_WEEK = 7

# Months in one year step
MONTHS_PER_YEAR = 12

# Stored format of an all-day task's local completion date
LOCAL_DATE_FORMAT = "%Y-%m-%d"
