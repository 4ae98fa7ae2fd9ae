"""
Meal Models

Contains the Meal model and the meal_to_category association table
linking meals to user-defined categories.
"""

from .base import db


# Many-to-many link; the composite key keeps each pair unique
meal_to_category = db.Table(
    'meal_to_category',
    db.Column('meal_id', db.Integer, db.ForeignKey('meals.id', ondelete='CASCADE'), primary_key=True),
    db.Column('category_id', db.Integer, db.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True, index=True),
)


class Meal(db.Model):
    """A dish definition, independent of any cooking occasion."""
    __tablename__ = 'meals'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    default_notes = db.Column(db.Text, nullable=True)
    default_photo_url = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    categories = db.relationship(
        'Category', secondary=meal_to_category, back_populates='meals',
        order_by='Category.name', lazy='selectin'
    )
    entries = db.relationship('MealEntry', back_populates='meal', lazy=True, cascade='all, delete-orphan')

    def __repr__(self):
        return f"<Meal(id={self.id}, title='{self.title}')>"
