"""
Entry Service

The cooking log: entries record a meal cooked on a calendar date. Used by
the timeline and calendar views and the JSON entries API.
"""

import logging
from datetime import date

from sqlalchemy.orm import joinedload

from models import Meal, MealEntry
from utils.dates import parse_date
from utils.sanitizer import sanitize_notes
from .errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _entries_query(session, user_id):
    return (
        session.query(MealEntry)
        .options(joinedload(MealEntry.meal).selectinload(Meal.categories))
        .filter(MealEntry.user_id == user_id)
    )


def _coerce_date(value):
    if isinstance(value, date):
        return value
    try:
        return parse_date(value)
    except ValueError:
        raise ValidationError('Invalid date')


def _clean_photo_urls(photo_urls):
    return [url for url in (photo_urls or []) if isinstance(url, str) and url.strip()]


def serialize_entry(entry):
    """JSON-ready dict for an entry with its meal and categories."""
    meal = entry.meal
    return {
        'id': entry.id,
        'meal_id': entry.meal_id,
        'date_cooked': entry.date_cooked.isoformat(),
        'notes': entry.notes,
        'photo_urls': list(entry.photo_urls or []),
        'created_at': entry.created_at.isoformat() if entry.created_at else None,
        'meal': {
            'id': meal.id,
            'title': meal.title,
            'default_notes': meal.default_notes,
            'default_photo_url': meal.default_photo_url,
            'categories': [{'id': c.id, 'name': c.name} for c in meal.categories],
        },
    }


def get_entries_by_date_range(session, user_id, start, end):
    """Entries cooked between start and end inclusive, newest date first."""
    return (
        _entries_query(session, user_id)
        .filter(MealEntry.date_cooked >= start, MealEntry.date_cooked <= end)
        .order_by(MealEntry.date_cooked.desc(), MealEntry.id.desc())
        .all()
    )


def get_entries_by_date(session, user_id, day):
    return (
        _entries_query(session, user_id)
        .filter(MealEntry.date_cooked == day)
        .order_by(MealEntry.created_at.desc(), MealEntry.id.desc())
        .all()
    )


def get_all_entries(session, user_id, limit=None, offset=0):
    """
    Timeline page of entries, newest date first.

    Returns:
        (entries, has_more) where has_more says another page exists
    """
    query = (
        _entries_query(session, user_id)
        .order_by(MealEntry.date_cooked.desc(), MealEntry.id.desc())
        .offset(offset)
    )
    if limit is None:
        return query.all(), False

    # Fetch one extra row to learn whether another page exists
    rows = query.limit(limit + 1).all()
    return rows[:limit], len(rows) > limit


def get_dates_with_entries(session, user_id, start, end):
    """Distinct dates in [start, end] that have at least one entry, ascending."""
    rows = (
        session.query(MealEntry.date_cooked)
        .filter(MealEntry.user_id == user_id,
                MealEntry.date_cooked >= start,
                MealEntry.date_cooked <= end)
        .distinct()
        .order_by(MealEntry.date_cooked)
        .all()
    )
    return [row.date_cooked for row in rows]


def get_entries_by_meal(session, user_id, meal_id):
    return (
        _entries_query(session, user_id)
        .filter(MealEntry.meal_id == meal_id)
        .order_by(MealEntry.date_cooked.desc(), MealEntry.id.desc())
        .all()
    )


def get_entry_by_id(session, entry_id, user_id):
    return (
        _entries_query(session, user_id)
        .filter(MealEntry.id == entry_id)
        .first()
    )


def create_entry(session, user_id, meal_id, date_cooked, notes=None, photo_urls=None):
    """
    Log a cooking event.

    Raises:
        NotFoundError: If the meal does not exist or belongs to another user
        ValidationError: If date_cooked is not a valid date
    """
    day = _coerce_date(date_cooked)

    meal = (
        session.query(Meal)
        .filter(Meal.id == meal_id, Meal.user_id == user_id)
        .first()
    )
    if meal is None:
        raise NotFoundError(f'Meal not found: {meal_id}')

    entry = MealEntry(
        user_id=user_id,
        meal_id=meal.id,
        date_cooked=day,
        notes=sanitize_notes(notes),
        photo_urls=_clean_photo_urls(photo_urls),
    )
    session.add(entry)
    session.commit()
    logger.info("Logged entry %s (meal %s on %s) for user %s", entry.id, meal.id, day, user_id)
    return entry


def update_entry(session, entry_id, user_id, **changes):
    """
    Update an entry's notes and/or photo_urls. The cooked date is fixed
    once created.

    Returns:
        The updated entry, or None if the user does not own it
    """
    unknown = set(changes) - {'notes', 'photo_urls'}
    if unknown:
        raise TypeError(f"Unknown entry fields: {', '.join(sorted(unknown))}")

    entry = get_entry_by_id(session, entry_id, user_id)
    if entry is None:
        return None

    if 'notes' in changes:
        entry.notes = sanitize_notes(changes['notes'])
    if 'photo_urls' in changes:
        entry.photo_urls = _clean_photo_urls(changes['photo_urls'])

    session.commit()
    return entry


def delete_entry(session, entry_id, user_id):
    """Delete an entry. Returns False if the user does not own it."""
    entry = (
        session.query(MealEntry)
        .filter(MealEntry.id == entry_id, MealEntry.user_id == user_id)
        .first()
    )
    if entry is None:
        return False

    session.delete(entry)
    session.commit()
    logger.info("Deleted entry %s for user %s", entry_id, user_id)
    return True
