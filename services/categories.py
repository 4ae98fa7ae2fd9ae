"""
Category Service

CRUD for user-defined meal categories. Every lookup is scoped to the
owning user; other users' categories behave as if they did not exist.
"""

import logging

from sqlalchemy import func

from models import Category, meal_to_category
from utils.sanitizer import sanitize_category_name
from .errors import ValidationError

logger = logging.getLogger(__name__)


def _clean_name(name):
    cleaned = sanitize_category_name(name)
    if not cleaned:
        raise ValidationError('Name is required')
    return cleaned


def get_categories_by_user(session, user_id):
    """All of a user's categories, newest first."""
    return (
        session.query(Category)
        .filter(Category.user_id == user_id)
        .order_by(Category.created_at.desc(), Category.id.desc())
        .all()
    )


def get_categories_with_meal_counts(session, user_id):
    """
    Categories with the number of meals in each, newest first.

    Returns:
        List of (Category, meal_count) tuples
    """
    rows = (
        session.query(Category, func.count(meal_to_category.c.meal_id))
        .outerjoin(meal_to_category, meal_to_category.c.category_id == Category.id)
        .filter(Category.user_id == user_id)
        .group_by(Category.id)
        .order_by(Category.created_at.desc(), Category.id.desc())
        .all()
    )
    return [(category, int(count)) for category, count in rows]


def get_category_by_id(session, category_id, user_id):
    return (
        session.query(Category)
        .filter(Category.id == category_id, Category.user_id == user_id)
        .first()
    )


def get_user_category_ids(session, user_id, category_ids):
    """Subset of category_ids that belong to the user, in the given order."""
    wanted = []
    for raw in category_ids or []:
        try:
            value = int(raw)
        except (TypeError, ValueError):
            continue
        if value not in wanted:
            wanted.append(value)
    if not wanted:
        return []

    owned = {
        row.id for row in session.query(Category.id)
        .filter(Category.user_id == user_id, Category.id.in_(wanted))
    }
    return [cid for cid in wanted if cid in owned]


def create_category(session, user_id, name):
    """
    Create a category.

    Raises:
        ValidationError: If the name is empty after cleaning
    """
    category = Category(user_id=user_id, name=_clean_name(name))
    session.add(category)
    session.commit()
    logger.info("Created category %s for user %s", category.id, user_id)
    return category


def update_category(session, category_id, user_id, name):
    """Rename a category. Returns None if the user does not own it."""
    cleaned = _clean_name(name)
    category = get_category_by_id(session, category_id, user_id)
    if category is None:
        return None

    category.name = cleaned
    session.commit()
    return category


def delete_category(session, category_id, user_id):
    """Delete a category and its meal links. Returns False if not owned."""
    category = get_category_by_id(session, category_id, user_id)
    if category is None:
        return False

    session.delete(category)
    session.commit()
    logger.info("Deleted category %s for user %s", category_id, user_id)
    return True
