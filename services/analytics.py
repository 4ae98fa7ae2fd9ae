"""
Analytics Service

Cooking-pattern statistics computed from a user's entry history.

Every public function takes an SQLAlchemy session as its first argument and
follows the same failure policy: a data-access error is logged and an empty
(or zero-valued) result is returned, so a dashboard degrades to "no data"
instead of failing. Callers that need to tell "no data" apart from "query
failed" wrap the call with analytics_result().
"""

import functools
import logging
from collections import Counter, OrderedDict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from constants import DAY_NAMES, SUGGESTION_CATEGORY_COUNT, SUMMARY_CATEGORIES_PER_DAY
from models import Category, Meal, MealEntry, meal_to_category
from utils.dates import add_months, day_of_week as weekday_of, month_end, month_start, week_start
from .sql import day_of_week as weekday_expr

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsResult:
    """Outcome of an analytics call that keeps failures distinguishable."""
    data: Any
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


def empty_on_error(default):
    """
    Decorator applying the analytics failure policy.

    The decorated function's first argument must be the session. On an
    SQLAlchemyError the session is rolled back, the error logged and
    default() returned. The undecorated function stays reachable through
    __wrapped__ for analytics_result().
    """
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(session, *args, **kwargs):
            try:
                return fn(session, *args, **kwargs)
            except SQLAlchemyError:
                session.rollback()
                logger.exception("Error in %s", fn.__name__)
                return default()
        return wrapper
    return decorator


def analytics_result(fn, session, *args, **kwargs):
    """
    Run an analytics function, reporting failures instead of hiding them.

    Returns:
        AnalyticsResult with data on success, or data=None and an error
        message when the database call failed.
    """
    raw = getattr(fn, '__wrapped__', fn)
    try:
        return AnalyticsResult(raw(session, *args, **kwargs))
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Error in %s", raw.__name__)
        return AnalyticsResult(None, error=f"Could not load analytics: {e.__class__.__name__}")


def percentage(count, total):
    """round(100 * count / total), halves rounded up, integer arithmetic."""
    total = total or 1
    return (200 * count + total) // (2 * total)


def _empty_summary():
    return {
        'top_categories_by_day': OrderedDict((name, []) for name in DAY_NAMES),
        'total_entries_analyzed': 0,
    }


def _empty_general_statistics():
    return {
        'total_entries': 0,
        'total_meals': 0,
        'total_categories': 0,
        'unique_meals_cooked': 0,
        'entries_this_month': 0,
        'entries_this_week': 0,
        'first_entry_date': None,
        'last_entry_date': None,
        'average_entries_per_week': 0.0,
    }


def _category_counts_query(session, user_id, *columns):
    """Entries joined to their meals' categories, restricted to one user."""
    return (
        session.query(*columns)
        .select_from(MealEntry)
        .join(meal_to_category, meal_to_category.c.meal_id == MealEntry.meal_id)
        .join(Category, Category.id == meal_to_category.c.category_id)
        .filter(MealEntry.user_id == user_id, Category.user_id == user_id)
    )


# ============================================
# DAY-OF-WEEK PATTERNS
# ============================================

def _day_of_week_patterns(session, user_id):
    dow = weekday_expr(MealEntry.date_cooked)
    count = func.count()
    rows = (
        _category_counts_query(session, user_id,
                               dow.label('day_of_week'), Category.id, Category.name, count.label('count'))
        .group_by(dow, Category.id, Category.name)
        .order_by(dow, count.desc(), Category.id)
        .all()
    )
    if not rows:
        return []

    day_totals = Counter()
    for row in rows:
        day_totals[int(row.day_of_week)] += int(row.count)

    patterns = []
    for row in rows:
        day = int(row.day_of_week)
        count_value = int(row.count)
        patterns.append({
            'day_of_week': day,
            'day_name': DAY_NAMES[day],
            'category_id': row.id,
            'category_name': row.name,
            'count': count_value,
            'percentage': percentage(count_value, day_totals[day]),
        })
    return patterns


def _top_categories_for_day(session, user_id, day_of_week, limit=5):
    dow = weekday_expr(MealEntry.date_cooked)
    count = func.count()
    rows = (
        _category_counts_query(session, user_id, Category.id, Category.name, count.label('count'))
        .filter(dow == day_of_week)
        .group_by(Category.id, Category.name)
        .order_by(count.desc(), Category.id)
        .limit(limit)
        .all()
    )
    return [
        {'category_id': row.id, 'category_name': row.name, 'count': int(row.count)}
        for row in rows
    ]


@empty_on_error(list)
def get_category_day_of_week_patterns(session, user_id):
    """
    Which categories a user cooks on each day of the week.

    Returns:
        List of dicts (day_of_week, day_name, category_id, category_name,
        count, percentage) ordered by weekday, then count descending, then
        category id. percentage is the category's share of that weekday's
        category-tagged entries.
    """
    return _day_of_week_patterns(session, user_id)


@empty_on_error(list)
def get_top_categories_for_day(session, user_id, day_of_week, limit=5):
    """
    Top categories for one weekday (0 = Sunday), most cooked first.

    Ties are broken by category id so results are stable.
    """
    return _top_categories_for_day(session, user_id, day_of_week, limit)


@empty_on_error(list)
def get_meals_for_day_of_week_pattern(session, user_id, day_of_week=None):
    """
    Meal ids in the user's top categories for a weekday.

    Uses the top three categories for the weekday (today when day_of_week
    is None) and returns the distinct ids, ascending, of the user's meals in
    any of them. An empty list means there is no history for that weekday.
    """
    if day_of_week is None:
        day_of_week = weekday_of(date.today())

    top = _top_categories_for_day(session, user_id, day_of_week, SUGGESTION_CATEGORY_COUNT)
    if not top:
        return []

    category_ids = [c['category_id'] for c in top]
    rows = (
        session.query(Meal.id)
        .join(meal_to_category, meal_to_category.c.meal_id == Meal.id)
        .filter(Meal.user_id == user_id, meal_to_category.c.category_id.in_(category_ids))
        .distinct()
        .order_by(Meal.id)
        .all()
    )
    return [row.id for row in rows]


@empty_on_error(_empty_summary)
def get_cooking_patterns_summary(session, user_id):
    """
    Top three categories (name and count) for each weekday, Sunday first,
    plus the total number of category-tagged entries analyzed.
    """
    patterns = _day_of_week_patterns(session, user_id)

    summary = _empty_summary()
    for pattern in patterns:
        day_list = summary['top_categories_by_day'][pattern['day_name']]
        # patterns are already sorted by count within each day
        if len(day_list) < SUMMARY_CATEGORIES_PER_DAY:
            day_list.append({'category_name': pattern['category_name'], 'count': pattern['count']})

    summary['total_entries_analyzed'] = sum(p['count'] for p in patterns)
    return summary


# ============================================
# GENERAL STATISTICS
# ============================================

@empty_on_error(_empty_general_statistics)
def get_general_statistics(session, user_id, today=None):
    """Headline numbers for the analytics page."""
    today = today or date.today()

    total_entries, unique_meals, first_date, last_date = (
        session.query(
            func.count(MealEntry.id),
            func.count(func.distinct(MealEntry.meal_id)),
            func.min(MealEntry.date_cooked),
            func.max(MealEntry.date_cooked),
        )
        .filter(MealEntry.user_id == user_id)
        .one()
    )
    total_meals = session.query(func.count(Meal.id)).filter(Meal.user_id == user_id).scalar()
    total_categories = session.query(func.count(Category.id)).filter(Category.user_id == user_id).scalar()

    def entries_between(start, end):
        return (
            session.query(func.count(MealEntry.id))
            .filter(MealEntry.user_id == user_id,
                    MealEntry.date_cooked >= start,
                    MealEntry.date_cooked <= end)
            .scalar()
        )

    monday = week_start(today)
    stats = _empty_general_statistics()
    stats.update({
        'total_entries': total_entries or 0,
        'total_meals': total_meals or 0,
        'total_categories': total_categories or 0,
        'unique_meals_cooked': unique_meals or 0,
        'entries_this_month': entries_between(month_start(today), month_end(today)),
        'entries_this_week': entries_between(monday, monday + timedelta(days=6)),
        'first_entry_date': first_date,
        'last_entry_date': last_date,
    })

    if total_entries:
        weeks = (last_date - first_date).days // 7 + 1
        stats['average_entries_per_week'] = round(total_entries / weeks, 1)
    return stats


@empty_on_error(list)
def get_top_meals(session, user_id, limit=10):
    """Most frequently cooked meals with their count and last cooked date."""
    count = func.count(MealEntry.id)
    rows = (
        session.query(Meal.id, Meal.title, count.label('count'),
                      func.max(MealEntry.date_cooked).label('last_cooked'))
        .join(MealEntry, MealEntry.meal_id == Meal.id)
        .filter(Meal.user_id == user_id, MealEntry.user_id == user_id)
        .group_by(Meal.id, Meal.title)
        .order_by(count.desc(), Meal.id)
        .limit(limit)
        .all()
    )
    return [
        {'meal_id': row.id, 'title': row.title, 'count': int(row.count), 'last_cooked': row.last_cooked}
        for row in rows
    ]


@empty_on_error(list)
def get_category_statistics(session, user_id):
    """
    Per-category meal and entry counts, including categories with no meals.

    Ordered by entry count descending, then name.
    """
    entry_count = func.count(MealEntry.id)
    rows = (
        session.query(
            Category.id,
            Category.name,
            func.count(func.distinct(meal_to_category.c.meal_id)).label('meal_count'),
            entry_count.label('entry_count'),
            func.max(MealEntry.date_cooked).label('last_cooked'),
        )
        .outerjoin(meal_to_category, meal_to_category.c.category_id == Category.id)
        .outerjoin(MealEntry, (MealEntry.meal_id == meal_to_category.c.meal_id)
                   & (MealEntry.user_id == user_id))
        .filter(Category.user_id == user_id)
        .group_by(Category.id, Category.name)
        .order_by(entry_count.desc(), Category.name, Category.id)
        .all()
    )
    return [
        {
            'category_id': row.id,
            'category_name': row.name,
            'meal_count': int(row.meal_count),
            'entry_count': int(row.entry_count),
            'last_cooked': row.last_cooked,
        }
        for row in rows
    ]


@empty_on_error(list)
def get_monthly_statistics(session, user_id, months=12, today=None):
    """
    Entries per calendar month for the last `months` months, oldest first.

    Months without entries are included with a count of 0.
    """
    today = today or date.today()
    first_month = add_months(month_start(today), -(months - 1))

    dates = (
        session.query(MealEntry.date_cooked)
        .filter(MealEntry.user_id == user_id,
                MealEntry.date_cooked >= first_month,
                MealEntry.date_cooked <= month_end(today))
        .all()
    )
    counts = Counter(row.date_cooked.strftime('%Y-%m') for row in dates)

    result = []
    for offset in range(months):
        key = add_months(first_month, offset).strftime('%Y-%m')
        result.append({'month': key, 'count': counts.get(key, 0)})
    return result
