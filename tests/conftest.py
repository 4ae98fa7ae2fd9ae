"""
Shared fixtures: an app on the testing config with a fresh in-memory
database per test, plus small factories for users, meals and entries.
"""

import os
import sys
from datetime import date

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app  # noqa: E402
from models import User, db  # noqa: E402
from services.categories import create_category  # noqa: E402
from services.entries import create_entry  # noqa: E402
from services.meals import create_meal  # noqa: E402


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'files')
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def session(app):
    return db.session


def _create_user(session, email, name='Test Cook', password='correct-horse'):
    user = User(name=name, email=email)
    user.set_password(password)
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def user(session):
    return _create_user(session, 'cook@example.com')


@pytest.fixture
def other_user(session):
    return _create_user(session, 'someone@example.com', name='Someone Else')


@pytest.fixture
def anon_client(app):
    return app.test_client()


@pytest.fixture
def client(app, user):
    """Test client logged in as `user`."""
    client = app.test_client()
    with client.session_transaction() as sess:
        sess['user_id'] = user.id
    return client


@pytest.fixture
def make_category(session, user):
    def _make(name, owner=None):
        return create_category(session, (owner or user).id, name)
    return _make


@pytest.fixture
def make_meal(session, user):
    def _make(title, categories=(), owner=None, **kwargs):
        return create_meal(session, (owner or user).id, title,
                           category_ids=[c.id for c in categories], **kwargs)
    return _make


@pytest.fixture
def log_meal(session, user):
    def _log(meal, day, owner=None, **kwargs):
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return create_entry(session, (owner or user).id, meal.id, day, **kwargs)
    return _log
