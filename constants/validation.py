"""
Validation Constants

Contains whitelist values and limits for validating user input.
"""

# Maximum field lengths
MAX_LENGTHS = {
    'meal_title': 200,
    'category_name': 50,
    'notes': 5000,
    'user_name': 100,
    'email': 255,
}

# Allowed image extensions
ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}

# Content types served for stored photos
CONTENT_TYPES = {
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
    'webp': 'image/webp',
    'gif': 'image/gif',
}

# Bounds for the "not cooked recently" suggestion window (days)
MIN_SUGGESTION_DAYS = 1
MAX_SUGGESTION_DAYS = 365

# History views
VALID_VIEWS = {'timeline', 'calendar'}
MAX_PAGE_SIZE = 100
