"""
Image Validation and Processing Module

Validates uploaded meal photos before they are written to local storage.
Every accepted photo is decoded and re-encoded as JPEG through Pillow so
nothing but pixel data reaches disk.
"""

import os
from io import BytesIO

from PIL import Image


class ImageValidationError(Exception):
    """Raised when an uploaded photo fails validation."""
    pass


# Allowed image formats (Pillow format names)
ALLOWED_FORMATS = {'JPEG', 'PNG', 'GIF', 'WEBP'}

# Largest source image accepted before resizing (decompression bomb guard)
MAX_SOURCE_DIMENSION = 8192

# Default per-photo size limit (5MB)
MAX_FILE_SIZE = 5 * 1024 * 1024


def allowed_file(filename, allowed_extensions):
    """Check the filename extension against a whitelist."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed_extensions


def _read_limited(image_data, max_bytes):
    """Read bytes or a file-like object into a buffer, enforcing max_bytes."""
    if isinstance(image_data, bytes):
        content = image_data
    else:
        image_data.seek(0)
        content = image_data.read(max_bytes + 1)

    if not content:
        raise ImageValidationError("Empty file")
    if len(content) > max_bytes:
        raise ImageValidationError(f"File size exceeds {max_bytes // (1024 * 1024)}MB limit")
    return BytesIO(content)


def _flatten_alpha(img):
    """Composite transparent images onto white; JPEG has no alpha channel."""
    if img.mode not in ('RGBA', 'LA', 'P'):
        return img.convert('RGB') if img.mode != 'RGB' else img

    if img.mode != 'RGBA':
        img = img.convert('RGBA')
    background = Image.new('RGB', img.size, (255, 255, 255))
    background.paste(img, mask=img.split()[-1])
    return background


def validate_and_process_image(image_data, output_path, max_bytes=MAX_FILE_SIZE, max_dimension=2048):
    """
    Validate a photo and save it as a re-encoded JPEG.

    Args:
        image_data: Raw image bytes or file-like object
        output_path: Target path; the extension is replaced with .jpg
        max_bytes: Maximum accepted upload size in bytes
        max_dimension: Longest side after resizing (default 2048)

    Returns:
        str: The path actually written (always .jpg)

    Raises:
        ImageValidationError: If the data is not an acceptable image
    """
    buffer = _read_limited(image_data, max_bytes)

    try:
        # verify() detects truncated/fake files but leaves the image unusable
        Image.open(buffer).verify()
        buffer.seek(0)
        img = Image.open(buffer)

        if img.format not in ALLOWED_FORMATS:
            raise ImageValidationError(
                f"Invalid image format: {img.format}. "
                f"Allowed formats: {', '.join(sorted(ALLOWED_FORMATS))}"
            )

        width, height = img.size
        if width > MAX_SOURCE_DIMENSION or height > MAX_SOURCE_DIMENSION:
            raise ImageValidationError(
                f"Image dimensions too large: {width}x{height}. "
                f"Maximum: {MAX_SOURCE_DIMENSION}x{MAX_SOURCE_DIMENSION}"
            )

        if width > max_dimension or height > max_dimension:
            img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

        img = _flatten_alpha(img)

        output_path = os.path.splitext(output_path)[0] + '.jpg'
        img.save(output_path, 'JPEG', quality=85, optimize=True)
        return output_path

    except ImageValidationError:
        raise
    except Image.DecompressionBombError:
        raise ImageValidationError("Image appears to be a decompression bomb (too large when decoded)")
    except (OSError, SyntaxError, ValueError) as e:
        raise ImageValidationError(f"Invalid or corrupted image: {e}")
