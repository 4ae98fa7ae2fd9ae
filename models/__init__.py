"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .user import User
from .meal import Meal, meal_to_category
from .category import Category
from .entry import MealEntry
from .settings import UserSettings

__all__ = [
    'db',
    'User',
    'Meal',
    'meal_to_category',
    'Category',
    'MealEntry',
    'UserSettings',
]
