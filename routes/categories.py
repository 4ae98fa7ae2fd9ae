"""
Category Routes
"""

from flask import Blueprint, abort, flash, g, redirect, render_template, request, url_for

from models import db
from services.categories import (
    create_category, delete_category, get_categories_with_meal_counts, update_category,
)
from services.errors import ValidationError
from .auth import login_required

bp = Blueprint('categories', __name__, url_prefix='/categories')


@bp.route('')
@login_required
def categories_list():
    categories = get_categories_with_meal_counts(db.session, g.user.id)
    return render_template('categories.html', categories=categories)


@bp.route('/create', methods=['POST'])
@login_required
def category_add():
    try:
        category = create_category(db.session, g.user.id, request.form.get('name'))
    except ValidationError as e:
        flash(f'Category {str(e).lower()}', 'danger')
        return redirect(url_for('categories.categories_list'))

    flash(f'Category "{category.name}" added!', 'success')
    return redirect(url_for('categories.categories_list'))


@bp.route('/<int:id>/edit', methods=['POST'])
@login_required
def category_edit(id):
    try:
        category = update_category(db.session, id, g.user.id, request.form.get('name'))
    except ValidationError as e:
        flash(f'Category {str(e).lower()}', 'danger')
        return redirect(url_for('categories.categories_list'))

    if category is None:
        abort(404)
    flash(f'Category "{category.name}" updated!', 'success')
    return redirect(url_for('categories.categories_list'))


@bp.route('/<int:id>/delete', methods=['POST'])
@login_required
def category_delete(id):
    if not delete_category(db.session, id, g.user.id):
        abort(404)
    flash('Category deleted!', 'success')
    return redirect(url_for('categories.categories_list'))
