"""
Services Package

Business logic modules for the meal journal. Every function takes the
SQLAlchemy session as its first argument.
"""

from .errors import NotFoundError, ValidationError

from .analytics import (
    AnalyticsResult,
    analytics_result,
    get_category_day_of_week_patterns,
    get_top_categories_for_day,
    get_meals_for_day_of_week_pattern,
    get_cooking_patterns_summary,
    get_general_statistics,
    get_top_meals,
    get_category_statistics,
    get_monthly_statistics,
)

from .categories import (
    get_categories_by_user,
    get_categories_with_meal_counts,
    get_category_by_id,
    create_category,
    update_category,
    delete_category,
)

from .meals import (
    get_meals_by_user,
    search_meals,
    get_meals_by_category,
    get_meal_by_id,
    get_recent_meals,
    create_meal,
    update_meal,
    delete_meal,
    get_meals_for_suggestion,
)

from .entries import (
    serialize_entry,
    get_entries_by_date_range,
    get_entries_by_date,
    get_all_entries,
    get_dates_with_entries,
    get_entries_by_meal,
    get_entry_by_id,
    create_entry,
    update_entry,
    delete_entry,
)

from .settings import (
    DEFAULT_SETTINGS,
    get_settings,
    update_settings,
    reset_settings,
)

__all__ = [
    # Errors
    'NotFoundError',
    'ValidationError',
    # Analytics
    'AnalyticsResult',
    'analytics_result',
    'get_category_day_of_week_patterns',
    'get_top_categories_for_day',
    'get_meals_for_day_of_week_pattern',
    'get_cooking_patterns_summary',
    'get_general_statistics',
    'get_top_meals',
    'get_category_statistics',
    'get_monthly_statistics',
    # Categories
    'get_categories_by_user',
    'get_categories_with_meal_counts',
    'get_category_by_id',
    'create_category',
    'update_category',
    'delete_category',
    # Meals
    'get_meals_by_user',
    'search_meals',
    'get_meals_by_category',
    'get_meal_by_id',
    'get_recent_meals',
    'create_meal',
    'update_meal',
    'delete_meal',
    'get_meals_for_suggestion',
    # Entries
    'serialize_entry',
    'get_entries_by_date_range',
    'get_entries_by_date',
    'get_all_entries',
    'get_dates_with_entries',
    'get_entries_by_meal',
    'get_entry_by_id',
    'create_entry',
    'update_entry',
    'delete_entry',
    # Settings
    'DEFAULT_SETTINGS',
    'get_settings',
    'update_settings',
    'reset_settings',
]
