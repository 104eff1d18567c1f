"""Application-wide constants.

This module centralizes magic numbers and configuration values that are
used across multiple modules. Values that need to be configurable at
runtime should go in config.py instead.
"""

# ===================
# Interview Quiz
# ===================

# Every generated question offers exactly this many choices
QUIZ_OPTION_COUNT = 4

# Separator used when a quiz mixes categories ("Technical & Leadership")
CATEGORY_LABEL_SEPARATOR = " & "

# Markdown emphasis markers removed from improvement tips
EMPHASIS_MARKERS = ("**", "__")


# ===================
# Industry Insights
# ===================

# Minimum entries requested from the model for each insight list
MIN_INSIGHT_SALARY_RANGES = 5
MIN_INSIGHT_LIST_ENTRIES = 5


# ===================
# Cover Letters
# ===================

COVER_LETTER_STATUS_COMPLETED = "completed"


# ===================
# Redis Key Prefixes
# ===================

QUIZ_SESSION_KEY_PREFIX = "quiz:session:"
