"""
File Routes

Photo upload for the entry and meal forms, and serving stored photos to
logged-in users.
"""

import logging
import os

from flask import Blueprint, abort, current_app, jsonify, request, send_from_directory

from constants import CONTENT_TYPES
from services.files import is_safe_filename, save_photo
from utils.image_handler import ImageValidationError
from .auth import login_required
from .helpers import upload_settings

logger = logging.getLogger(__name__)

bp = Blueprint('files', __name__)

# Stored names are unique, so a photo never changes once written
CACHE_MAX_AGE = 31536000


@bp.route('/api/files', methods=['POST'])
@login_required
def api_upload():
    file = request.files.get('file')
    if file is None or not file.filename:
        return jsonify({'error': 'No file provided'}), 400

    try:
        url = save_photo(file, **upload_settings(current_app.config))
    except ImageValidationError as e:
        return jsonify({'error': str(e)}), 400
    except OSError:
        logger.exception("Failed to store upload %s", file.filename)
        return jsonify({'error': 'Failed to upload file'}), 500

    return jsonify({'url': url})


@bp.route('/files/<path:filename>')
@login_required
def serve_file(filename):
    if not is_safe_filename(filename):
        abort(400)

    upload_folder = current_app.config['UPLOAD_FOLDER']
    if not os.path.isfile(os.path.join(upload_folder, filename)):
        abort(404)

    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    response = send_from_directory(
        upload_folder, filename,
        mimetype=CONTENT_TYPES.get(ext, 'application/octet-stream'),
        max_age=CACHE_MAX_AGE,
    )
    response.cache_control.public = True
    response.cache_control.immutable = True
    return response
