"""
Meal Routes
"""

from flask import Blueprint, abort, current_app, flash, g, redirect, render_template, request, url_for

from models import db
from services.categories import get_categories_by_user
from services.entries import get_entries_by_meal
from services.errors import ValidationError
from services.files import delete_photo, save_photo
from services.meals import (
    create_meal, delete_meal, get_meal_by_id, get_meals_by_category, get_meals_by_user,
    search_meals, update_meal,
)
from utils.image_handler import ImageValidationError
from .auth import login_required
from .helpers import get_id_list, safe_int, upload_settings

bp = Blueprint('meals', __name__, url_prefix='/meals')


def _form_state(meal=None):
    """Values to re-render the form with after a failed submit."""
    return {
        'title': request.form.get('title', ''),
        'default_notes': request.form.get('default_notes', ''),
        'category_ids': get_id_list(request.form, 'category_ids'),
        'meal': meal,
    }


def _upload_photo():
    """Store the optional 'photo' upload. Returns its URL or None."""
    photo = request.files.get('photo')
    if photo is None or not photo.filename:
        return None
    return save_photo(photo, **upload_settings(current_app.config))


@bp.route('')
@login_required
def meals_list():
    user_id = g.user.id
    search = request.args.get('search', '').strip()
    category_id = safe_int(request.args.get('category'), default=None)

    if search:
        meals = search_meals(db.session, user_id, search)
    elif category_id is not None:
        meals = get_meals_by_category(db.session, user_id, category_id)
    else:
        meals = get_meals_by_user(db.session, user_id)

    return render_template('meals.html', meals=meals, search=search,
                           selected_category=category_id,
                           categories=get_categories_by_user(db.session, user_id))


@bp.route('/new', methods=['GET', 'POST'])
@login_required
def meal_add():
    categories = get_categories_by_user(db.session, g.user.id)

    if request.method == 'POST':
        photo_url = None
        try:
            photo_url = _upload_photo()
            meal = create_meal(
                db.session, g.user.id,
                title=request.form.get('title'),
                default_notes=request.form.get('default_notes'),
                default_photo_url=photo_url,
                category_ids=get_id_list(request.form, 'category_ids'),
            )
        except (ValidationError, ImageValidationError) as e:
            if photo_url:
                delete_photo(photo_url, current_app.config['UPLOAD_FOLDER'])
            flash(str(e), 'danger')
            return render_template('meal_form.html', categories=categories, **_form_state()), 400

        flash(f'Meal "{meal.title}" created!', 'success')
        return redirect(url_for('meals.meal_view', id=meal.id))

    return render_template('meal_form.html', categories=categories,
                           title='', default_notes='', category_ids=[], meal=None)


@bp.route('/<int:id>')
@login_required
def meal_view(id):
    meal = get_meal_by_id(db.session, id, g.user.id)
    if meal is None:
        abort(404)
    entries = get_entries_by_meal(db.session, g.user.id, meal.id)
    return render_template('meal_view.html', meal=meal, entries=entries)


@bp.route('/<int:id>/edit', methods=['GET', 'POST'])
@login_required
def meal_edit(id):
    meal = get_meal_by_id(db.session, id, g.user.id)
    if meal is None:
        abort(404)
    categories = get_categories_by_user(db.session, g.user.id)

    if request.method == 'POST':
        changes = {
            'title': request.form.get('title'),
            'default_notes': request.form.get('default_notes'),
            'category_ids': get_id_list(request.form, 'category_ids'),
        }
        old_photo = meal.default_photo_url
        photo_url = None
        try:
            photo_url = _upload_photo()
            if photo_url:
                changes['default_photo_url'] = photo_url
            elif request.form.get('remove_photo'):
                changes['default_photo_url'] = None
            update_meal(db.session, meal.id, g.user.id, **changes)
        except (ValidationError, ImageValidationError) as e:
            if photo_url:
                delete_photo(photo_url, current_app.config['UPLOAD_FOLDER'])
            flash(str(e), 'danger')
            return render_template('meal_form.html', categories=categories, **_form_state(meal)), 400

        if old_photo and 'default_photo_url' in changes:
            delete_photo(old_photo, current_app.config['UPLOAD_FOLDER'])

        flash(f'Meal "{meal.title}" updated!', 'success')
        return redirect(url_for('meals.meal_view', id=meal.id))

    return render_template('meal_form.html', categories=categories, meal=meal,
                           title=meal.title, default_notes=meal.default_notes or '',
                           category_ids=[c.id for c in meal.categories])


@bp.route('/<int:id>/delete', methods=['POST'])
@login_required
def meal_delete(id):
    meal = get_meal_by_id(db.session, id, g.user.id)
    if meal is None:
        abort(404)
    title = meal.title

    # Collect photos before the entries are removed with the meal
    photos = [meal.default_photo_url] if meal.default_photo_url else []
    for entry in meal.entries:
        photos.extend(entry.photo_urls or [])

    delete_meal(db.session, meal.id, g.user.id)
    for url in photos:
        delete_photo(url, current_app.config['UPLOAD_FOLDER'])

    flash(f'Meal "{title}" deleted!', 'success')
    return redirect(url_for('meals.meals_list'))
