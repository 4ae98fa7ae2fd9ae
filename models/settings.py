"""
Settings Model

Per-user settings stored as a JSON document. Defaults are merged in on
read by services.settings, so the stored document only holds overrides.
"""

from .base import db


class UserSettings(db.Model):
    """JSON settings document, one row per user."""
    __tablename__ = 'user_settings'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), unique=True, nullable=False)
    settings = db.Column(db.JSON, default=dict, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)
