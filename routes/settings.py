"""
Settings Routes
"""

from flask import Blueprint, flash, g, redirect, render_template, request, url_for

from models import db
from services.categories import get_categories_by_user
from services.errors import ValidationError
from services.settings import get_settings, reset_settings, update_settings
from .auth import login_required
from .helpers import get_id_list

bp = Blueprint('settings', __name__, url_prefix='/settings')


@bp.route('')
@login_required
def settings_page():
    return render_template('settings.html',
                           settings=get_settings(db.session, g.user.id),
                           categories=get_categories_by_user(db.session, g.user.id))


@bp.route('/suggestions', methods=['POST'])
@login_required
def settings_suggestions():
    # Partial update: only fields present in the form change
    updates = {}
    if 'days_threshold' in request.form:
        updates['suggestion_days_threshold'] = request.form.get('days_threshold')
    if 'use_day_of_week' in request.form:
        values = request.form.getlist('use_day_of_week')
        updates['suggestion_use_day_of_week'] = any(v in ('true', 'on', '1') for v in values)
    if 'excluded_category_ids' in request.form:
        updates['suggestion_excluded_category_ids'] = get_id_list(request.form, 'excluded_category_ids')

    try:
        update_settings(db.session, g.user.id, updates)
    except ValidationError as e:
        flash(str(e), 'danger')
        return redirect(url_for('settings.settings_page'))

    flash('Settings saved!', 'success')
    return redirect(url_for('settings.settings_page'))


@bp.route('/reset', methods=['POST'])
@login_required
def settings_reset():
    reset_settings(db.session, g.user.id)
    flash('Settings reset to defaults', 'success')
    return redirect(url_for('settings.settings_page'))
