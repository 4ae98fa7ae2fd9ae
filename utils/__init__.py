# Utility modules for the meal journal
from .image_handler import validate_and_process_image, allowed_file, ImageValidationError
from .sanitizer import (
    sanitize_text, sanitize_name, sanitize_meal_title,
    sanitize_category_name, sanitize_notes
)
from .dates import (
    day_of_week, day_name, parse_date, parse_month, month_start, month_end,
    add_months, week_start, month_grid, format_date
)
