"""
Home Routes

The cooking history: a paged timeline or a month calendar, the quick-add
meal list and "cook again" suggestions.
"""

from datetime import date

from flask import Blueprint, abort, current_app, g, render_template, request

from constants import SUGGESTION_CATEGORY_COUNT, VALID_VIEWS
from models import db
from services.analytics import get_top_categories_for_day
from services.categories import get_categories_by_user
from services.entries import (
    get_all_entries, get_dates_with_entries, get_entries_by_date_range, get_entries_by_meal,
)
from services.meals import get_meal_by_id, get_meals_by_user, get_meals_for_suggestion
from services.settings import get_settings
from utils.dates import add_months, day_of_week, month_end, month_grid, parse_month
from .auth import login_required
from .helpers import safe_int

bp = Blueprint('home', __name__)


def build_suggestions(user_id, today=None):
    """Suggestion meals for today using the user's settings."""
    today = today or date.today()
    settings = get_settings(db.session, user_id)

    preferred = []
    if settings['suggestion_use_day_of_week']:
        top = get_top_categories_for_day(db.session, user_id, day_of_week(today), SUGGESTION_CATEGORY_COUNT)
        preferred = [c['category_id'] for c in top]

    return get_meals_for_suggestion(
        db.session, user_id,
        days_threshold=settings['suggestion_days_threshold'],
        excluded_category_ids=settings['suggestion_excluded_category_ids'],
        preferred_category_ids=preferred,
        today=today,
    )


@bp.route('/')
@login_required
def index():
    user_id = g.user.id
    today = date.today()

    view = request.args.get('view', 'timeline')
    if view not in VALID_VIEWS:
        view = 'timeline'
    month = parse_month(request.args.get('month'), default=today.replace(day=1))

    meal_filter = None
    meal_id = safe_int(request.args.get('meal'), default=None)
    if meal_id is not None:
        meal_filter = get_meal_by_id(db.session, meal_id, user_id)
        if meal_filter is None:
            abort(404)

    context = {
        'view': view,
        'month': month,
        'prev_month': add_months(month, -1),
        'next_month': add_months(month, 1),
        'today': today,
        'meals': get_meals_by_user(db.session, user_id),
        'categories': get_categories_by_user(db.session, user_id),
        'suggestions': build_suggestions(user_id, today),
        'meal_filter': meal_filter,
        'has_more': False,
    }

    if meal_filter is not None:
        context['entries'] = get_entries_by_meal(db.session, user_id, meal_filter.id)
    elif view == 'calendar':
        grid = month_grid(month)
        entries = get_entries_by_date_range(db.session, user_id, grid[0], grid[-1])
        by_date = {}
        for entry in entries:
            by_date.setdefault(entry.date_cooked, []).append(entry)
        context.update({
            'grid': grid,
            'entries_by_date': by_date,
            'entries': [e for e in entries if month <= e.date_cooked <= month_end(month)],
            'dates_with_entries': set(get_dates_with_entries(db.session, user_id, month, month_end(month))),
        })
    else:
        entries, has_more = get_all_entries(
            db.session, user_id, limit=current_app.config['TIMELINE_PAGE_SIZE']
        )
        context.update({'entries': entries, 'has_more': has_more})

    return render_template('index.html', **context)
