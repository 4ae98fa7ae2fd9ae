"""
Auth Routes

Minimal session login. The logged-in user is loaded into g.user before
every request; login_required guards pages and JSON endpoints.
"""

import functools
import logging

from flask import Blueprint, flash, g, jsonify, redirect, render_template, request, session, url_for

from constants import MAX_LENGTHS
from models import User, db
from utils.sanitizer import sanitize_name
from .helpers import local_redirect_target

logger = logging.getLogger(__name__)

bp = Blueprint('auth', __name__)


@bp.before_app_request
def load_logged_in_user():
    user_id = session.get('user_id')
    g.user = db.session.get(User, user_id) if user_id is not None else None


def login_required(view):
    """Redirect anonymous page requests to /login; 401 JSON for /api/."""
    @functools.wraps(view)
    def wrapped_view(**kwargs):
        if g.user is None:
            if request.path.startswith('/api/'):
                return jsonify({'error': 'Unauthorized'}), 401
            return redirect(url_for('auth.login', next=request.path))
        return view(**kwargs)
    return wrapped_view


@bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')
        user = User.query.filter_by(email=email).first()

        if user is None or not user.check_password(password):
            flash('Invalid email or password', 'danger')
            return render_template('login.html', email=email), 401

        session.clear()
        session['user_id'] = user.id
        logger.info("User %s logged in", user.id)
        return redirect(local_redirect_target(request.args.get('next'), url_for('home.index')))

    return render_template('login.html', email='')


@bp.route('/register', methods=['GET', 'POST'])
def register():
    if request.method == 'POST':
        name = sanitize_name(request.form.get('name'), MAX_LENGTHS['user_name'])
        email = request.form.get('email', '').strip().lower()[:MAX_LENGTHS['email']]
        password = request.form.get('password', '')

        if not name or '@' not in email or len(password) < 8:
            flash('Name, a valid email and a password of at least 8 characters are required', 'danger')
            return render_template('register.html', name=name, email=email), 400
        if User.query.filter_by(email=email).first():
            flash('An account with that email already exists', 'danger')
            return render_template('register.html', name=name, email=email), 400

        user = User(name=name, email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        logger.info("Registered user %s", user.id)

        session.clear()
        session['user_id'] = user.id
        return redirect(url_for('home.index'))

    return render_template('register.html', name='', email='')


@bp.route('/logout', methods=['POST'])
def logout():
    session.clear()
    return redirect(url_for('auth.login'))
