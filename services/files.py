"""
File Storage Service

Stores meal and entry photos on local disk. Uploads are validated and
re-encoded by utils.image_handler; stored files are addressed by a public
URL of the form /files/<filename>.
"""

import logging
import os
import secrets
import time

from utils.image_handler import ImageValidationError, allowed_file, validate_and_process_image

logger = logging.getLogger(__name__)

URL_PREFIX = '/files/'


def ensure_upload_dir(upload_folder):
    os.makedirs(upload_folder, exist_ok=True)


def generate_filename():
    """Unique base name: <milliseconds>-<random>."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"


def is_safe_filename(filename):
    """Reject names that could escape the upload folder."""
    return bool(filename) and '..' not in filename and '/' not in filename and '\\' not in filename


def save_photo(file_storage, upload_folder, allowed_extensions, max_bytes):
    """
    Validate and store one uploaded photo.

    Args:
        file_storage: werkzeug FileStorage from request.files
        upload_folder: Directory photos are written to
        allowed_extensions: Accepted filename extensions
        max_bytes: Size limit for a single photo

    Returns:
        str: Public URL of the stored photo

    Raises:
        ImageValidationError: If the file is missing, too large or not an image
    """
    if file_storage is None or not file_storage.filename:
        raise ImageValidationError('No file provided')
    if not allowed_file(file_storage.filename, allowed_extensions):
        raise ImageValidationError('Invalid file type. Only images are allowed.')

    ensure_upload_dir(upload_folder)
    target = os.path.join(upload_folder, generate_filename())
    final_path = validate_and_process_image(file_storage.stream, target, max_bytes=max_bytes)

    filename = os.path.basename(final_path)
    logger.info("Stored photo %s", filename)
    return URL_PREFIX + filename


def save_photos(file_storages, upload_folder, allowed_extensions, max_bytes):
    """Store every non-empty upload; returns their URLs in order."""
    return [
        save_photo(f, upload_folder, allowed_extensions, max_bytes)
        for f in file_storages
        if f is not None and f.filename
    ]


def resolve_photo_path(url, upload_folder):
    """Filesystem path for a /files/ URL, or None if it is not one of ours."""
    if not url or not url.startswith(URL_PREFIX):
        return None
    filename = url[len(URL_PREFIX):]
    if not is_safe_filename(filename):
        return None
    return os.path.join(upload_folder, filename)


def delete_photo(url, upload_folder):
    """Remove a stored photo. Returns True if a file was deleted."""
    path = resolve_photo_path(url, upload_folder)
    if path is None or not os.path.exists(path):
        return False
    try:
        os.remove(path)
    except OSError:
        logger.warning("Could not delete photo %s", path, exc_info=True)
        return False
    return True
