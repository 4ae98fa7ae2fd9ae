"""
Category Model

User-defined tags grouping meals (e.g. "Soup", "Dessert").
"""

from .base import db
from .meal import meal_to_category


class Category(db.Model):
    """Named group of meals, owned by a single user."""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(50), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    meals = db.relationship('Meal', secondary=meal_to_category, back_populates='categories', lazy=True)

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"
