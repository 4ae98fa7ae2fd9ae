"""
Smoke tests for the meal journal app.
Run with: python tests/test_smoke.py
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def test_app_imports():
    """Verify app can be imported without errors."""
    from app import app, create_app
    from models import db
    assert app is not None
    assert callable(create_app)
    assert db is not None
    print("OK: App imports successfully")


def test_models_import():
    """Verify models can be imported."""
    from models import User, Meal, Category, MealEntry, UserSettings, meal_to_category
    assert Meal.__tablename__ == 'meals'
    assert MealEntry.__tablename__ == 'meal_entries'
    assert meal_to_category.name == 'meal_to_category'
    print("OK: Models import successfully")


def test_security_utils_import():
    """Verify security utilities can be imported."""
    from utils import validate_and_process_image, sanitize_text, allowed_file
    assert callable(validate_and_process_image)
    assert callable(sanitize_text)
    assert callable(allowed_file)
    print("OK: Security utils import successfully")


def test_constants_import():
    """Verify constants can be imported."""
    from constants import DAY_NAMES, MAX_LENGTHS, SUGGESTION_CATEGORY_COUNT
    assert 'meal_title' in MAX_LENGTHS
    assert SUGGESTION_CATEGORY_COUNT == 3
    print("OK: Constants import successfully")


def test_weekday_numbering_unchanged():
    """Verify weekday numbering has expected values."""
    from datetime import date
    from constants import DAY_NAMES
    from utils.dates import day_of_week

    # These values must not change: 0 = Sunday
    assert DAY_NAMES[0] == 'Sunday'
    assert DAY_NAMES[6] == 'Saturday'
    assert day_of_week(date(2024, 1, 7)) == 0
    assert day_of_week(date(2024, 1, 8)) == 1
    assert day_of_week(date(2024, 1, 13)) == 6
    print("OK: Weekday numbering unchanged")


def test_app_runs():
    """Verify app can create test client."""
    from app import create_app
    from models import db
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        with app.test_client() as client:
            response = client.get('/login')
            assert response.status_code == 200
            print("OK: App serves login page")
        db.drop_all()


if __name__ == '__main__':
    print("Running smoke tests...\n")

    tests = [
        test_app_imports,
        test_models_import,
        test_security_utils_import,
        test_constants_import,
        test_weekday_numbering_unchanged,
        test_app_runs,
    ]

    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{'='*40}")
    if failed:
        print(f"FAILED: {failed}/{len(tests)} tests")
        sys.exit(1)
    else:
        print(f"PASSED: {len(tests)}/{len(tests)} tests")
        sys.exit(0)
