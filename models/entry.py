"""
Meal Entry Model

A record of a specific meal having been cooked on a specific date.
"""

from .base import db


class MealEntry(db.Model):
    """Cooking log entry. date_cooked is a calendar date with no time component."""
    __tablename__ = 'meal_entries'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    meal_id = db.Column(db.Integer, db.ForeignKey('meals.id', ondelete='CASCADE'), nullable=False, index=True)
    date_cooked = db.Column(db.Date, nullable=False, index=True)
    notes = db.Column(db.Text, nullable=True)
    photo_urls = db.Column(db.JSON, default=list, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    meal = db.relationship('Meal', back_populates='entries', lazy='joined')

    def __repr__(self):
        return f"<MealEntry(id={self.id}, meal_id={self.meal_id}, date_cooked={self.date_cooked})>"
