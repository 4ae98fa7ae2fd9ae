"""
Constants Package

Static values shared by models, services and routes.
"""

from .calendar import (
    DAY_NAMES,
    SHORT_DAY_NAMES,
    DAYS_IN_WEEK,
    SUGGESTION_CATEGORY_COUNT,
    SUMMARY_CATEGORIES_PER_DAY,
)

from .validation import (
    MAX_LENGTHS,
    ALLOWED_EXTENSIONS,
    CONTENT_TYPES,
    MIN_SUGGESTION_DAYS,
    MAX_SUGGESTION_DAYS,
    VALID_VIEWS,
    MAX_PAGE_SIZE,
)

__all__ = [
    # Calendar
    'DAY_NAMES',
    'SHORT_DAY_NAMES',
    'DAYS_IN_WEEK',
    'SUGGESTION_CATEGORY_COUNT',
    'SUMMARY_CATEGORIES_PER_DAY',
    # Validation
    'MAX_LENGTHS',
    'ALLOWED_EXTENSIONS',
    'CONTENT_TYPES',
    'MIN_SUGGESTION_DAYS',
    'MAX_SUGGESTION_DAYS',
    'VALID_VIEWS',
    'MAX_PAGE_SIZE',
]
