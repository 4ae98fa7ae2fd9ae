"""
Input Sanitization Module

Cleans user-submitted text before it is stored. HTML escaping is left to
Jinja autoescaping at render time, so values are stored as typed.
"""

import re

from constants import MAX_LENGTHS

CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Clean free text such as notes.

    Keeps newlines and tabs, removes other control characters and trims the
    result to max_length.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Cleaned string (may be empty)
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = CONTROL_CHARS.sub('', text).strip()

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_name(name, max_length=200):
    """
    Clean a single-line name (meal title, category name).

    Removes all control characters including newlines and collapses runs of
    whitespace.

    Args:
        name: The name to sanitize
        max_length: Maximum allowed length (default 200)

    Returns:
        Cleaned name (may be empty)
    """
    if not name:
        return ''

    if not isinstance(name, str):
        name = str(name)

    # Newlines and tabs become spaces before the collapse
    name = re.sub(r'\s+', ' ', CONTROL_CHARS.sub('', name)).strip()

    if len(name) > max_length:
        name = name[:max_length].rstrip()

    return name


def sanitize_meal_title(title):
    return sanitize_name(title, MAX_LENGTHS['meal_title'])


def sanitize_category_name(name):
    return sanitize_name(name, MAX_LENGTHS['category_name'])


def sanitize_notes(notes):
    """Clean notes; returns None for blank input so the column stays NULL."""
    cleaned = sanitize_text(notes, MAX_LENGTHS['notes'])
    return cleaned or None
