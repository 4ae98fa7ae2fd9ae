"""
Meal Service

CRUD for meals and their category links, plus the "what should I cook"
suggestion query. All functions take the session first and scope every
query to the owning user.
"""

import logging
from datetime import date, timedelta

from sqlalchemy import func

from models import Category, Meal, MealEntry, meal_to_category
from utils.sanitizer import sanitize_meal_title, sanitize_notes
from .categories import get_user_category_ids
from .errors import ValidationError

logger = logging.getLogger(__name__)

# Fields update_meal accepts
UPDATABLE_FIELDS = {'title', 'default_notes', 'default_photo_url', 'category_ids'}


def _clean_title(title):
    cleaned = sanitize_meal_title(title)
    if not cleaned:
        raise ValidationError('Title is required')
    return cleaned


def _set_categories(session, meal, user_id, category_ids):
    """Replace a meal's categories, silently dropping ids the user does not own."""
    owned_ids = get_user_category_ids(session, user_id, category_ids)
    if owned_ids:
        meal.categories = session.query(Category).filter(Category.id.in_(owned_ids)).all()
    else:
        meal.categories = []


def get_meals_by_user(session, user_id):
    """All meals with categories loaded, newest first."""
    return (
        session.query(Meal)
        .filter(Meal.user_id == user_id)
        .order_by(Meal.created_at.desc(), Meal.id.desc())
        .all()
    )


def search_meals(session, user_id, term):
    """Meals whose title contains term (case-insensitive), newest first."""
    term = (term or '').strip()
    if not term:
        return get_meals_by_user(session, user_id)

    # Escape LIKE wildcards so a search for "50%" matches literally
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return (
        session.query(Meal)
        .filter(Meal.user_id == user_id, Meal.title.ilike(f'%{escaped}%', escape='\\'))
        .order_by(Meal.created_at.desc(), Meal.id.desc())
        .all()
    )


def get_meals_by_category(session, user_id, category_id):
    return (
        session.query(Meal)
        .join(meal_to_category, meal_to_category.c.meal_id == Meal.id)
        .filter(Meal.user_id == user_id, meal_to_category.c.category_id == category_id)
        .order_by(Meal.created_at.desc(), Meal.id.desc())
        .all()
    )


def get_meal_by_id(session, meal_id, user_id):
    return (
        session.query(Meal)
        .filter(Meal.id == meal_id, Meal.user_id == user_id)
        .first()
    )


def get_recent_meals(session, user_id, limit=10):
    """
    Distinct meals from the user's `limit` most recent entries.

    Most recently cooked first.
    """
    recent_ids = [
        row.meal_id for row in
        session.query(MealEntry.meal_id)
        .filter(MealEntry.user_id == user_id)
        .order_by(MealEntry.date_cooked.desc(), MealEntry.id.desc())
        .limit(limit)
    ]
    unique_ids = list(dict.fromkeys(recent_ids))
    if not unique_ids:
        return []

    meals = {
        meal.id: meal for meal in
        session.query(Meal).filter(Meal.user_id == user_id, Meal.id.in_(unique_ids))
    }
    return [meals[mid] for mid in unique_ids if mid in meals]


def get_last_cooked_dates(session, user_id):
    """Map of meal_id -> most recent date_cooked for every cooked meal."""
    rows = (
        session.query(MealEntry.meal_id, func.max(MealEntry.date_cooked).label('last_cooked'))
        .filter(MealEntry.user_id == user_id)
        .group_by(MealEntry.meal_id)
        .all()
    )
    return {row.meal_id: row.last_cooked for row in rows}


def create_meal(session, user_id, title, default_notes=None, default_photo_url=None, category_ids=None):
    """
    Create a meal and link it to the given categories.

    Raises:
        ValidationError: If the title is empty after cleaning
    """
    meal = Meal(
        user_id=user_id,
        title=_clean_title(title),
        default_notes=sanitize_notes(default_notes),
        default_photo_url=default_photo_url or None,
    )
    _set_categories(session, meal, user_id, category_ids)
    session.add(meal)
    session.commit()
    logger.info("Created meal %s for user %s", meal.id, user_id)
    return meal


def update_meal(session, meal_id, user_id, **changes):
    """
    Partially update a meal. Only the keyword arguments passed are changed;
    passing category_ids replaces the whole category set.

    Returns:
        The updated Meal, or None if the user does not own it
    """
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Unknown meal fields: {', '.join(sorted(unknown))}")

    title = _clean_title(changes['title']) if 'title' in changes else None

    meal = get_meal_by_id(session, meal_id, user_id)
    if meal is None:
        return None

    if title is not None:
        meal.title = title
    if 'default_notes' in changes:
        meal.default_notes = sanitize_notes(changes['default_notes'])
    if 'default_photo_url' in changes:
        meal.default_photo_url = changes['default_photo_url'] or None
    if 'category_ids' in changes:
        _set_categories(session, meal, user_id, changes['category_ids'])

    session.commit()
    return meal


def delete_meal(session, meal_id, user_id):
    """Delete a meal with its entries and category links. False if not owned."""
    meal = get_meal_by_id(session, meal_id, user_id)
    if meal is None:
        return False

    session.delete(meal)
    session.commit()
    logger.info("Deleted meal %s for user %s", meal_id, user_id)
    return True


def get_meals_for_suggestion(session, user_id, days_threshold=14, excluded_category_ids=None,
                             preferred_category_ids=None, limit=6, today=None):
    """
    Meals worth cooking again.

    Candidates are meals not cooked in the last `days_threshold` days
    (never-cooked meals included) that are not in an excluded category.
    Meals in a preferred category come first, then the least recently
    cooked (never-cooked before everything else), then by id.

    Returns:
        List of (Meal, last_cooked) tuples; last_cooked is None for
        meals that were never cooked
    """
    today = today or date.today()
    cutoff = today - timedelta(days=days_threshold)
    excluded = {int(cid) for cid in excluded_category_ids or []}
    preferred = {int(cid) for cid in preferred_category_ids or []}

    last_cooked = get_last_cooked_dates(session, user_id)

    candidates = []
    for meal in get_meals_by_user(session, user_id):
        cooked = last_cooked.get(meal.id)
        if cooked is not None and cooked > cutoff:
            continue
        category_ids = {c.id for c in meal.categories}
        if category_ids & excluded:
            continue
        candidates.append((meal, cooked, bool(category_ids & preferred)))

    candidates.sort(key=lambda c: (not c[2], c[1] is not None, c[1] or date.min, c[0].id))
    return [(meal, cooked) for meal, cooked, _ in candidates[:limit]]
