"""
Analytics Routes

The analytics page and its JSON endpoints. The page renders whatever the
services return (empty results on failure); the JSON endpoints go through
analytics_result so a failed query is a 500 instead of an empty answer.
"""

from datetime import date

from flask import Blueprint, g, jsonify, render_template, request

from constants import DAY_NAMES, DAYS_IN_WEEK
from models import db
from services.analytics import (
    analytics_result,
    get_category_day_of_week_patterns,
    get_category_statistics,
    get_cooking_patterns_summary,
    get_general_statistics,
    get_meals_for_day_of_week_pattern,
    get_monthly_statistics,
    get_top_categories_for_day,
    get_top_meals,
)
from utils.dates import day_of_week
from .auth import login_required
from .helpers import safe_int

bp = Blueprint('analytics', __name__)


def _parse_day(value):
    """0-6 weekday from a URL value, or None if it is not one."""
    try:
        day = int(value)
    except (TypeError, ValueError):
        return None
    return day if 0 <= day < DAYS_IN_WEEK else None


def _invalid_day():
    return jsonify({'error': 'Day must be an integer from 0 (Sunday) to 6 (Saturday)'}), 400


def _respond(result, key, **extra):
    if not result.ok:
        return jsonify({'error': result.error}), 500
    return jsonify({key: result.data, **extra})


@bp.route('/analytics')
@login_required
def analytics_page():
    user_id = g.user.id
    return render_template(
        'analytics.html',
        patterns_summary=get_cooking_patterns_summary(db.session, user_id),
        general_stats=get_general_statistics(db.session, user_id),
        top_meals=get_top_meals(db.session, user_id, 10),
        category_stats=get_category_statistics(db.session, user_id),
        monthly_stats=get_monthly_statistics(db.session, user_id),
    )


@bp.route('/api/analytics/patterns')
@login_required
def api_patterns():
    result = analytics_result(get_category_day_of_week_patterns, db.session, g.user.id)
    return _respond(result, 'patterns')


@bp.route('/api/analytics/top-categories/<day>')
@login_required
def api_top_categories(day):
    day = _parse_day(day)
    if day is None:
        return _invalid_day()
    limit = safe_int(request.args.get('limit'), default=5, min_val=1, max_val=50)

    result = analytics_result(get_top_categories_for_day, db.session, g.user.id, day, limit)
    return _respond(result, 'categories', day_of_week=day, day_name=DAY_NAMES[day])


@bp.route('/api/analytics/suggestions')
@login_required
def api_suggestions():
    raw_day = request.args.get('day')
    if raw_day in (None, ''):
        day = day_of_week(date.today())
    else:
        day = _parse_day(raw_day)
        if day is None:
            return _invalid_day()

    result = analytics_result(get_meals_for_day_of_week_pattern, db.session, g.user.id, day)
    return _respond(result, 'meal_ids', day_of_week=day, day_name=DAY_NAMES[day])


@bp.route('/api/analytics/summary')
@login_required
def api_summary():
    result = analytics_result(get_cooking_patterns_summary, db.session, g.user.id)
    if not result.ok:
        return jsonify({'error': result.error}), 500
    return jsonify(result.data)
