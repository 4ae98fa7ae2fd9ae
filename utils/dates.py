"""
Date Utilities

Calendar helpers for the history views and analytics. All values are
plain datetime.date objects; entries carry no time-of-day component.
"""

import calendar
from datetime import date, datetime, timedelta

from constants import DAY_NAMES


def day_of_week(value):
    """Weekday number with 0 = Sunday through 6 = Saturday."""
    return value.isoweekday() % 7


def day_name(day):
    """Name for a 0-6 weekday number (0 = Sunday)."""
    return DAY_NAMES[day]


def parse_date(value):
    """
    Parse a YYYY-MM-DD string into a date.

    Raises:
        ValueError: If the string is empty or not a valid date
    """
    if not value:
        raise ValueError('Date is required')
    return datetime.strptime(value.strip(), '%Y-%m-%d').date()


def parse_month(value, default=None):
    """Parse YYYY-MM (or a full YYYY-MM-DD) into the first day of that month."""
    if not value:
        return default
    value = value.strip()
    for fmt in ('%Y-%m', '%Y-%m-%d'):
        try:
            return datetime.strptime(value, fmt).date().replace(day=1)
        except ValueError:
            continue
    return default


def month_start(value):
    return value.replace(day=1)


def month_end(value):
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=last_day)


def add_months(value, months):
    """Shift the first day of value's month by a number of months."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def week_start(value):
    """Monday of the week containing value."""
    return value - timedelta(days=value.weekday())


def month_grid(value):
    """
    Six full weeks (42 days) covering value's month, starting on the Monday
    on or before the first of the month.
    """
    start = week_start(month_start(value))
    return [start + timedelta(days=i) for i in range(42)]


def format_date(value, fmt='%b %d, %Y'):
    """Display format used by templates (e.g. "Jan 15, 2024")."""
    if not value:
        return ''
    return value.strftime(fmt)
