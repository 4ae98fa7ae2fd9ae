"""
Calendar Constants

Day numbering used across the app: 0 = Sunday through 6 = Saturday.
"""

DAY_NAMES = ['Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday']

SHORT_DAY_NAMES = [name[:3] for name in DAY_NAMES]

DAYS_IN_WEEK = 7

# Number of categories used to bias suggestions for a weekday
SUGGESTION_CATEGORY_COUNT = 3

# Number of categories shown per weekday on the analytics summary
SUMMARY_CATEGORIES_PER_DAY = 3
