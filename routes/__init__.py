"""
Routes Package

Flask blueprints for the meal journal web app.
"""

import logging

from flask import jsonify, render_template, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from .auth import login_required

logger = logging.getLogger(__name__)


def _wants_json():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """HTML error pages, or JSON bodies for /api/ requests."""

    @app.errorhandler(400)
    def bad_request(error):
        if _wants_json():
            return jsonify({'error': 'Bad request'}), 400
        return render_template('error.html', code=400, message='Bad request'), 400

    @app.errorhandler(404)
    def not_found(error):
        if _wants_json():
            return jsonify({'error': 'Not found'}), 404
        return render_template('error.html', code=404, message='Page not found'), 404

    @app.errorhandler(413)
    def too_large(error):
        if _wants_json():
            return jsonify({'error': 'Upload too large'}), 413
        return render_template('error.html', code=413, message='Upload too large'), 413

    @app.errorhandler(500)
    def server_error(error):
        db.session.rollback()
        if _wants_json():
            return jsonify({'error': 'Internal server error'}), 500
        return render_template('error.html', code=500, message='Something went wrong'), 500

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        logger.exception("Database error on %s %s", request.method, request.path)
        if _wants_json():
            return jsonify({'error': 'Database error'}), 500
        return render_template('error.html', code=500, message='Something went wrong'), 500


def register_blueprints(app):
    from . import analytics, auth, categories, entries, files, home, meals, settings

    for module in (auth, home, meals, categories, entries, analytics, settings, files):
        app.register_blueprint(module.bp)
    register_error_handlers(app)


__all__ = ['login_required', 'register_blueprints', 'register_error_handlers']
