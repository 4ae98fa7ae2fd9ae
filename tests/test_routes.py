"""Tests for the web routes and JSON endpoints."""

from io import BytesIO

from PIL import Image
from sqlalchemy.exc import OperationalError

from constants import DAY_NAMES
from models import Category, Meal, MealEntry, User
from services.settings import get_settings

MONDAY = '2024-01-15'


def png_upload(name='photo.png'):
    buffer = BytesIO()
    Image.new('RGB', (20, 20), (10, 120, 60)).save(buffer, 'PNG')
    buffer.seek(0)
    return buffer, name


# ============================================
# AUTH
# ============================================

def test_pages_require_login(anon_client):
    response = anon_client.get('/meals')

    assert response.status_code == 302
    assert '/login' in response.headers['Location']


def test_api_requires_login(anon_client):
    response = anon_client.get('/api/entries')

    assert response.status_code == 401
    assert response.get_json() == {'error': 'Unauthorized'}


def test_register_and_login(anon_client, session):
    response = anon_client.post('/register', data={
        'name': 'New Cook', 'email': 'New@Example.com', 'password': 'long-enough',
    })
    assert response.status_code == 302
    assert session.query(User).filter_by(email='new@example.com').count() == 1

    anon_client.post('/logout')
    assert anon_client.get('/').status_code == 302

    response = anon_client.post('/login?next=/meals', data={
        'email': 'new@example.com', 'password': 'long-enough',
    })
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/meals')


def test_login_wrong_password(anon_client, user):
    response = anon_client.post('/login', data={'email': user.email, 'password': 'nope'})

    assert response.status_code == 401


def test_login_ignores_external_next(anon_client, user):
    response = anon_client.post('/login?next=//evil.example.com', data={
        'email': user.email, 'password': 'correct-horse',
    })

    assert 'evil.example.com' not in response.headers['Location']


def test_register_duplicate_email(anon_client, user):
    response = anon_client.post('/register', data={
        'name': 'Again', 'email': user.email, 'password': 'long-enough',
    })

    assert response.status_code == 400


# ============================================
# HOME
# ============================================

def test_home_timeline(client, make_meal, log_meal):
    log_meal(make_meal('Pho'), MONDAY)

    response = client.get('/')

    assert response.status_code == 200
    assert b'Pho' in response.data


def test_home_calendar(client, make_meal, log_meal):
    log_meal(make_meal('Pho'), MONDAY)

    response = client.get('/?view=calendar&month=2024-01')

    assert response.status_code == 200
    assert b'January 2024' in response.data
    assert b'Pho' in response.data


def test_home_meal_filter_other_users_meal(client, other_user, make_meal):
    theirs = make_meal('Theirs', owner=other_user)

    assert client.get(f'/?meal={theirs.id}').status_code == 404


def test_home_escapes_titles(client, make_meal):
    make_meal('<script>alert(1)</script>')

    response = client.get('/')

    assert b'<script>alert(1)</script>' not in response.data
    assert b'&lt;script&gt;' in response.data


# ============================================
# MEALS AND CATEGORIES
# ============================================

def test_create_meal_via_form(client, session, user, make_category):
    soup = make_category('Soup')

    response = client.post('/meals/new', data={
        'title': 'Pho', 'default_notes': 'herbs', 'category_ids': [str(soup.id)],
        'photo': png_upload(),
    }, content_type='multipart/form-data')

    assert response.status_code == 302
    meal = session.query(Meal).one()
    assert [c.name for c in meal.categories] == ['Soup']
    assert meal.default_photo_url.startswith('/files/')


def test_create_meal_without_title(client, session):
    response = client.post('/meals/new', data={'title': ' '})

    assert response.status_code == 400
    assert session.query(Meal).count() == 0


def test_meals_list_search(client, make_meal):
    make_meal('Chicken Curry')
    make_meal('Salad')

    response = client.get('/meals?search=curry')

    assert b'Chicken Curry' in response.data
    assert b'Salad' not in response.data


def test_meal_view_and_edit(client, session, make_meal):
    meal = make_meal('Pho')

    assert client.get(f'/meals/{meal.id}').status_code == 200
    response = client.post(f'/meals/{meal.id}/edit', data={'title': 'Beef Pho', 'default_notes': ''})

    assert response.status_code == 302
    assert session.get(Meal, meal.id).title == 'Beef Pho'


def test_other_users_meal_is_not_found(client, other_user, make_meal):
    theirs = make_meal('Theirs', owner=other_user)

    assert client.get(f'/meals/{theirs.id}').status_code == 404
    assert client.post(f'/meals/{theirs.id}/delete').status_code == 404


def test_delete_meal(client, session, make_meal, log_meal):
    meal = make_meal('Pho')
    log_meal(meal, MONDAY)

    response = client.post(f'/meals/{meal.id}/delete')

    assert response.status_code == 302
    assert session.query(Meal).count() == 0
    assert session.query(MealEntry).count() == 0


def test_category_crud(client, session, user):
    client.post('/categories/create', data={'name': 'Soup'})
    category = session.query(Category).one()

    client.post(f'/categories/{category.id}/edit', data={'name': 'Soups'})
    assert session.get(Category, category.id).name == 'Soups'

    listing = client.get('/categories')
    assert b'Soups' in listing.data

    client.post(f'/categories/{category.id}/delete')
    assert session.query(Category).count() == 0


def test_category_create_requires_name(client, session):
    response = client.post('/categories/create', data={'name': ''}, follow_redirects=True)

    assert b'Category name is required' in response.data
    assert session.query(Category).count() == 0


# ============================================
# ENTRIES
# ============================================

def test_add_entry_form(client, session, make_meal):
    meal = make_meal('Pho', default_notes='herbs')

    page = client.get(f'/entries/add?meal_id={meal.id}&date={MONDAY}')
    assert page.status_code == 200
    assert b'herbs' in page.data

    response = client.post('/entries/add', data={
        'meal_id': str(meal.id), 'date_cooked': MONDAY, 'notes': 'great',
        'photos': [png_upload('a.png'), png_upload('b.png')],
    }, content_type='multipart/form-data')

    assert response.status_code == 302
    entry = session.query(MealEntry).one()
    assert entry.notes == 'great'
    assert len(entry.photo_urls) == 2


def test_add_entry_invalid_date(client, session, make_meal):
    meal = make_meal('Pho')

    response = client.post('/entries/add', data={'meal_id': str(meal.id), 'date_cooked': 'soon'})

    assert response.status_code == 400
    assert session.query(MealEntry).count() == 0


def test_add_entry_for_other_users_meal(client, other_user, make_meal):
    theirs = make_meal('Theirs', owner=other_user)

    response = client.post('/entries/add', data={'meal_id': str(theirs.id), 'date_cooked': MONDAY})

    assert response.status_code == 404


def test_add_entry_without_meal(client, session):
    response = client.post('/entries/add', data={'meal_id': '', 'date_cooked': MONDAY})

    assert response.status_code == 400
    assert b'Choose a meal' in response.data
    assert session.query(MealEntry).count() == 0


def test_add_entry_with_non_numeric_meal(client, session):
    response = client.post('/entries/add', data={'meal_id': 'soup', 'date_cooked': MONDAY})

    assert response.status_code == 400
    assert session.query(MealEntry).count() == 0


def test_edit_entry_removes_unchecked_photos(app, client, session, user, make_meal):
    meal = make_meal('Pho')
    client.post('/entries/add', data={
        'meal_id': str(meal.id), 'date_cooked': MONDAY, 'photos': [png_upload(), png_upload()],
    }, content_type='multipart/form-data')
    entry = session.query(MealEntry).one()
    keep, drop = entry.photo_urls

    client.post(f'/entries/{entry.id}/edit', data={'notes': 'edited', 'photo_urls': [keep]})
    session.expire_all()

    entry = session.get(MealEntry, entry.id)
    assert entry.notes == 'edited'
    assert entry.photo_urls == [keep]
    assert client.get(drop).status_code == 404


def test_delete_entry(client, session, make_meal, log_meal):
    entry = log_meal(make_meal('Pho'), MONDAY)

    response = client.post(f'/entries/{entry.id}/delete', data={'next': '/meals'})

    assert response.headers['Location'].endswith('/meals')
    assert session.query(MealEntry).count() == 0


def test_api_entries_pages(client, make_meal, log_meal):
    meal = make_meal('Pho')
    for day in range(1, 4):
        log_meal(meal, f'2024-01-0{day}')

    first = client.get('/api/entries?limit=2').get_json()
    rest = client.get('/api/entries?limit=2&offset=2').get_json()

    assert [e['date_cooked'] for e in first['entries']] == ['2024-01-03', '2024-01-02']
    assert first['has_more'] is True
    assert [e['date_cooked'] for e in rest['entries']] == ['2024-01-01']
    assert rest['has_more'] is False


# ============================================
# ANALYTICS API
# ============================================

def _soup_mondays(make_category, make_meal, log_meal):
    soup = make_category('Soup')
    meal = make_meal('Pho', [soup])
    log_meal(meal, '2024-01-01')
    log_meal(meal, '2024-01-08')
    return soup, meal


def test_analytics_page(client, make_category, make_meal, log_meal):
    _soup_mondays(make_category, make_meal, log_meal)

    response = client.get('/analytics')

    assert response.status_code == 200
    assert b'Soup' in response.data


def test_api_patterns(client, make_category, make_meal, log_meal):
    soup, _ = _soup_mondays(make_category, make_meal, log_meal)

    data = client.get('/api/analytics/patterns').get_json()

    assert data['patterns'] == [{
        'day_of_week': 1, 'day_name': 'Monday', 'category_id': soup.id,
        'category_name': 'Soup', 'count': 2, 'percentage': 100,
    }]


def test_api_top_categories(client, make_category, make_meal, log_meal):
    _soup_mondays(make_category, make_meal, log_meal)

    data = client.get('/api/analytics/top-categories/1?limit=3').get_json()

    assert data['day_name'] == 'Monday'
    assert [c['category_name'] for c in data['categories']] == ['Soup']


def test_api_top_categories_invalid_day(client):
    assert client.get('/api/analytics/top-categories/7').status_code == 400
    assert client.get('/api/analytics/top-categories/-1').status_code == 400
    assert client.get('/api/analytics/top-categories/monday').status_code == 400


def test_api_suggestions(client, make_category, make_meal, log_meal):
    _, meal = _soup_mondays(make_category, make_meal, log_meal)

    assert client.get('/api/analytics/suggestions?day=1').get_json()['meal_ids'] == [meal.id]
    assert client.get('/api/analytics/suggestions?day=2').get_json()['meal_ids'] == []
    assert client.get('/api/analytics/suggestions?day=9').status_code == 400


def test_api_summary_for_new_user(client):
    data = client.get('/api/analytics/summary').get_json()

    assert data['total_entries_analyzed'] == 0
    assert len(data['top_categories_by_day']) == 7


def test_api_summary_days_sunday_first(client, make_category, make_meal, log_meal):
    _soup_mondays(make_category, make_meal, log_meal)

    response = client.get('/api/analytics/summary')
    body = response.get_data(as_text=True)

    assert list(response.get_json()['top_categories_by_day']) == DAY_NAMES
    assert sorted(DAY_NAMES, key=body.index) == DAY_NAMES


def test_api_patterns_reports_database_failure(client, session, monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError('SELECT 1', {}, Exception('database is unavailable'))

    monkeypatch.setattr(session, 'query', boom)
    response = client.get('/api/analytics/patterns')

    assert response.status_code == 500
    assert 'error' in response.get_json()


# ============================================
# SETTINGS AND FILES
# ============================================

def test_settings_update(client, session, user, make_category):
    dessert = make_category('Dessert')

    client.post('/settings/suggestions', data={
        'days_threshold': '21',
        'use_day_of_week': ['false'],
        'excluded_category_ids': ['[]', str(dessert.id)],
    })

    settings = get_settings(session, user.id)
    assert settings['suggestion_days_threshold'] == 21
    assert settings['suggestion_use_day_of_week'] is False
    assert settings['suggestion_excluded_category_ids'] == [dessert.id]


def test_settings_checkbox_on(client, session, user):
    client.post('/settings/suggestions', data={'use_day_of_week': ['false', 'true']})

    assert get_settings(session, user.id)['suggestion_use_day_of_week'] is True


def test_settings_invalid_threshold(client, session, user):
    response = client.post('/settings/suggestions', data={'days_threshold': '0'}, follow_redirects=True)

    assert b'Days threshold must be between' in response.data
    assert get_settings(session, user.id)['suggestion_days_threshold'] == 14


def test_settings_reset(client, session, user):
    client.post('/settings/suggestions', data={'days_threshold': '30'})
    client.post('/settings/reset')

    assert get_settings(session, user.id)['suggestion_days_threshold'] == 14


def test_upload_and_serve_file(client):
    response = client.post('/api/files', data={'file': png_upload()}, content_type='multipart/form-data')
    url = response.get_json()['url']

    served = client.get(url)

    assert served.status_code == 200
    assert served.mimetype == 'image/jpeg'
    assert 'max-age=31536000' in served.headers['Cache-Control']


def test_upload_requires_file(client):
    response = client.post('/api/files', data={}, content_type='multipart/form-data')

    assert response.status_code == 400


def test_upload_rejects_non_image(client):
    response = client.post('/api/files', data={'file': (BytesIO(b'hello'), 'notes.png')},
                           content_type='multipart/form-data')

    assert response.status_code == 400


def test_serve_file_requires_login(anon_client):
    assert anon_client.get('/files/anything.jpg').status_code == 302


def test_serve_file_rejects_traversal(client):
    assert client.get('/files/..%2Fapp.py').status_code in (400, 404)
