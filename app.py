import logging
import os
import sqlite3

import click
from flask import Flask
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine

from config import get_config
from constants import DAY_NAMES, SHORT_DAY_NAMES
from models import db
from routes import register_blueprints
from services.files import ensure_upload_dir
from utils.dates import day_of_week, format_date

migrate = Migrate()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    # Enable SQLite foreign key enforcement so ON DELETE CASCADE applies
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def weekday_name(value, short=False):
    """Jinja filter: weekday name for a date or a 0-6 number (0 = Sunday)."""
    if value is None or value == '':
        return ''
    day = value if isinstance(value, int) else day_of_week(value)
    return (SHORT_DAY_NAMES if short else DAY_NAMES)[day]


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    app.logger.setLevel(level)


def register_commands(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables."""
        init_db(app)
        click.echo('Initialized the database.')


def init_db(app):
    with app.app_context():
        db.create_all()


def create_app(config_name=None):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    # JSON keeps dict order; the analytics summary lists days Sunday first
    app.json.sort_keys = False

    configure_logging(app)
    ensure_upload_dir(app.config['UPLOAD_FOLDER'])

    db.init_app(app)
    migrate.init_app(app, db)

    app.jinja_env.filters['weekday_name'] = weekday_name
    app.jinja_env.filters['format_date'] = format_date

    register_blueprints(app)
    register_commands(app)

    app.logger.info("Meal journal started (%s)", config_name or os.environ.get('FLASK_ENV', 'development'))
    return app


app = create_app()


if __name__ == '__main__':
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
