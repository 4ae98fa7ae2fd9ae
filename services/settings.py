"""
Settings Service

Per-user settings stored as a JSON document. Only overrides are stored;
DEFAULT_SETTINGS is merged in on every read so new settings get a value
without a data migration.
"""

import logging

from constants import MAX_SUGGESTION_DAYS, MIN_SUGGESTION_DAYS
from models import UserSettings
from .categories import get_user_category_ids
from .errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    'suggestion_days_threshold': 14,
    'suggestion_use_day_of_week': True,
    'suggestion_excluded_category_ids': [],
}


def _merge_with_defaults(stored):
    merged = {key: (list(value) if isinstance(value, list) else value)
              for key, value in DEFAULT_SETTINGS.items()}
    merged.update(stored or {})
    return merged


def _get_or_create_record(session, user_id):
    record = session.query(UserSettings).filter_by(user_id=user_id).first()
    if record is None:
        record = UserSettings(user_id=user_id, settings={})
        session.add(record)
        session.commit()
    return record


def _validate(session, user_id, updates):
    """Check and normalize the known settings in updates."""
    unknown = set(updates) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ValidationError(f"Unknown settings: {', '.join(sorted(unknown))}")

    cleaned = dict(updates)
    if 'suggestion_days_threshold' in cleaned:
        try:
            days = int(cleaned['suggestion_days_threshold'])
        except (TypeError, ValueError):
            raise ValidationError('Days threshold must be a number')
        if not MIN_SUGGESTION_DAYS <= days <= MAX_SUGGESTION_DAYS:
            raise ValidationError(
                f'Days threshold must be between {MIN_SUGGESTION_DAYS} and {MAX_SUGGESTION_DAYS}'
            )
        cleaned['suggestion_days_threshold'] = days

    if 'suggestion_use_day_of_week' in cleaned:
        cleaned['suggestion_use_day_of_week'] = bool(cleaned['suggestion_use_day_of_week'])

    if 'suggestion_excluded_category_ids' in cleaned:
        cleaned['suggestion_excluded_category_ids'] = get_user_category_ids(
            session, user_id, cleaned['suggestion_excluded_category_ids']
        )
    return cleaned


def get_settings(session, user_id):
    """Complete settings for a user, creating the record on first access."""
    return _merge_with_defaults(_get_or_create_record(session, user_id).settings)


def update_settings(session, user_id, updates):
    """
    Partial update: only keys present in updates change.

    Raises:
        ValidationError: For unknown keys or out-of-range values
    """
    cleaned = _validate(session, user_id, updates)
    record = _get_or_create_record(session, user_id)

    # Assign a new dict so the JSON column registers the change
    record.settings = {**(record.settings or {}), **cleaned}
    session.commit()
    logger.info("Updated settings for user %s: %s", user_id, sorted(cleaned))
    return _merge_with_defaults(record.settings)


def reset_settings(session, user_id):
    record = _get_or_create_record(session, user_id)
    record.settings = {}
    session.commit()
    return _merge_with_defaults({})
