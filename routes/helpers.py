"""
Route Helpers

Form parsing shared by the blueprints.
"""

import json


def safe_int(value, default=1, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(value) if value not in (None, '') else default
        if result is None:
            return None
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def get_id_list(form, name):
    """
    Read a list of ids submitted either as repeated fields (checkboxes) or
    as a single JSON array string. Invalid values are dropped.
    """
    values = form.getlist(name)
    if len(values) == 1 and values[0].strip().startswith('['):
        try:
            values = json.loads(values[0])
        except ValueError:
            values = []
        if not isinstance(values, list):
            values = []

    ids = []
    for value in values:
        parsed = safe_int(value, default=None)
        if parsed is not None and parsed not in ids:
            ids.append(parsed)
    return ids


def get_str_list(form, name):
    """Same as get_id_list for string values (photo URLs)."""
    values = form.getlist(name)
    if len(values) == 1 and values[0].strip().startswith('['):
        try:
            values = json.loads(values[0])
        except ValueError:
            values = []
        if not isinstance(values, list):
            values = []
    return [v for v in values if isinstance(v, str) and v.strip()]


def upload_settings(app_config):
    """Arguments for services.files.save_photo(s) taken from app config."""
    return {
        'upload_folder': app_config['UPLOAD_FOLDER'],
        'allowed_extensions': app_config['ALLOWED_EXTENSIONS'],
        'max_bytes': app_config['MAX_PHOTO_SIZE'],
    }


def local_redirect_target(target, default):
    """target if it is a path on this site, else default."""
    if not target or not target.startswith('/') or target.startswith('//'):
        return default
    return target
