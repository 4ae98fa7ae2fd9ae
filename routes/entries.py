"""
Entry Routes

Logging cooking events from a form, editing their notes and photos, and
the paged JSON feed the timeline uses for "load more".
"""

from datetime import date

from flask import (
    Blueprint, abort, current_app, flash, g, jsonify, redirect, render_template, request, url_for,
)

from constants import MAX_PAGE_SIZE
from models import db
from services.entries import (
    create_entry, delete_entry, get_all_entries, get_entry_by_id, serialize_entry, update_entry,
)
from services.errors import NotFoundError, ValidationError
from services.files import delete_photo, save_photos
from services.meals import get_meal_by_id, get_meals_by_user
from utils.image_handler import ImageValidationError
from .auth import login_required
from .helpers import get_str_list, local_redirect_target, safe_int, upload_settings

bp = Blueprint('entries', __name__)


def _upload_photos():
    return save_photos(request.files.getlist('photos'), **upload_settings(current_app.config))


def _discard(urls):
    for url in urls:
        delete_photo(url, current_app.config['UPLOAD_FOLDER'])


@bp.route('/entries/add', methods=['GET', 'POST'])
@login_required
def entry_add():
    user_id = g.user.id
    meals = get_meals_by_user(db.session, user_id)

    if request.method == 'POST':
        meal_id = safe_int(request.form.get('meal_id'), default=None)
        date_cooked = request.form.get('date_cooked', '')
        notes = request.form.get('notes')

        if meal_id is None:
            flash('Choose a meal', 'danger')
            return render_template('entry_form.html', entry=None, meals=meals, meal_id=None,
                                   date_cooked=date_cooked, notes=notes or ''), 400

        uploaded = []
        try:
            uploaded = _upload_photos()
            entry = create_entry(
                db.session, user_id, meal_id, date_cooked,
                notes=notes,
                photo_urls=get_str_list(request.form, 'photo_urls') + uploaded,
            )
        except NotFoundError:
            _discard(uploaded)
            abort(404)
        except (ValidationError, ImageValidationError) as e:
            _discard(uploaded)
            flash(str(e), 'danger')
            return render_template('entry_form.html', entry=None, meals=meals, meal_id=meal_id,
                                   date_cooked=date_cooked, notes=notes or ''), 400

        flash(f'Logged "{entry.meal.title}"!', 'success')
        return redirect(url_for('home.index'))

    # Prefill from the calendar (date) or a meal page (meal_id)
    meal_id = safe_int(request.args.get('meal_id'), default=None)
    notes = ''
    if meal_id is not None:
        meal = get_meal_by_id(db.session, meal_id, user_id)
        if meal is None:
            meal_id = None
        else:
            notes = meal.default_notes or ''
    date_cooked = request.args.get('date') or date.today().isoformat()

    return render_template('entry_form.html', entry=None, meals=meals, meal_id=meal_id,
                           date_cooked=date_cooked, notes=notes)


@bp.route('/entries/<int:id>/edit', methods=['GET', 'POST'])
@login_required
def entry_edit(id):
    entry = get_entry_by_id(db.session, id, g.user.id)
    if entry is None:
        abort(404)

    if request.method == 'POST':
        kept = [url for url in get_str_list(request.form, 'photo_urls') if url in (entry.photo_urls or [])]
        removed = [url for url in (entry.photo_urls or []) if url not in kept]

        try:
            uploaded = _upload_photos()
        except ImageValidationError as e:
            flash(str(e), 'danger')
            return redirect(url_for('entries.entry_edit', id=id))

        update_entry(db.session, entry.id, g.user.id,
                     notes=request.form.get('notes'), photo_urls=kept + uploaded)
        _discard(removed)
        flash('Entry updated!', 'success')
        return redirect(url_for('home.index'))

    return render_template('entry_form.html', entry=entry, meals=[entry.meal], meal_id=entry.meal_id,
                           date_cooked=entry.date_cooked.isoformat(), notes=entry.notes or '')


@bp.route('/entries/<int:id>/delete', methods=['POST'])
@login_required
def entry_delete(id):
    entry = get_entry_by_id(db.session, id, g.user.id)
    if entry is None:
        abort(404)
    photos = list(entry.photo_urls or [])

    delete_entry(db.session, entry.id, g.user.id)
    _discard(photos)
    flash('Entry deleted!', 'success')
    return redirect(local_redirect_target(request.form.get('next'), url_for('home.index')))


@bp.route('/api/entries')
@login_required
def api_entries():
    """Timeline page as JSON: ?limit=15&offset=0 -> {entries, has_more}."""
    limit = safe_int(request.args.get('limit'), default=current_app.config['TIMELINE_PAGE_SIZE'],
                     min_val=1, max_val=MAX_PAGE_SIZE)
    offset = safe_int(request.args.get('offset'), default=0, min_val=0)

    entries, has_more = get_all_entries(db.session, g.user.id, limit=limit, offset=offset)
    return jsonify({
        'entries': [serialize_entry(e) for e in entries],
        'has_more': has_more,
    })
