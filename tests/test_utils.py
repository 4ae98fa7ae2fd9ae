"""Tests for date helpers, the sanitizer and the weekday SQL expression."""

from datetime import date

from sqlalchemy import literal, select
from sqlalchemy.dialects import mysql, postgresql, sqlite

from services.sql import day_of_week as sql_day_of_week
from utils.dates import (
    add_months, day_of_week, format_date, month_end, month_grid, parse_date, parse_month, week_start,
)
from utils.sanitizer import sanitize_meal_title, sanitize_name, sanitize_notes, sanitize_text

import pytest


def test_day_of_week_sunday_is_zero():
    assert [day_of_week(date(2024, 1, d)) for d in range(7, 14)] == [0, 1, 2, 3, 4, 5, 6]


def test_parse_date():
    assert parse_date(' 2024-02-29 ') == date(2024, 2, 29)
    with pytest.raises(ValueError):
        parse_date('2023-02-29')
    with pytest.raises(ValueError):
        parse_date('')


def test_parse_month():
    assert parse_month('2024-03') == date(2024, 3, 1)
    assert parse_month('2024-03-17') == date(2024, 3, 1)
    assert parse_month('March', default=date(2000, 1, 1)) == date(2000, 1, 1)


def test_month_helpers():
    assert month_end(date(2024, 2, 10)) == date(2024, 2, 29)
    assert add_months(date(2024, 1, 31), -1) == date(2023, 12, 1)
    assert add_months(date(2024, 11, 1), 3) == date(2025, 2, 1)
    assert week_start(date(2024, 1, 14)) == date(2024, 1, 8)


def test_month_grid_six_weeks_from_monday():
    grid = month_grid(date(2024, 2, 1))

    assert len(grid) == 42
    assert grid[0] == date(2024, 1, 29)
    assert grid[0].weekday() == 0


def test_format_date():
    assert format_date(date(2024, 1, 5)) == 'Jan 05, 2024'
    assert format_date(None) == ''


def test_sanitize_text_keeps_newlines_drops_controls():
    assert sanitize_text('line one\nline\x00 two\x07') == 'line one\nline two'


def test_sanitize_text_truncates():
    assert sanitize_text('abcdef', max_length=3) == 'abc'


def test_sanitize_name_collapses_whitespace():
    assert sanitize_name('  Pad \t Thai\n') == 'Pad Thai'
    assert sanitize_name(None) == ''


def test_sanitize_meal_title_limit():
    assert len(sanitize_meal_title('x' * 500)) == 200


def test_sanitize_notes_blank_is_none():
    assert sanitize_notes(' \n ') is None
    assert sanitize_notes('<b>kept as typed</b>') == '<b>kept as typed</b>'


@pytest.mark.parametrize('dialect, fragment', [
    (sqlite.dialect(), "strftime('%w'"),
    (postgresql.dialect(), 'EXTRACT(DOW FROM'),
    (mysql.dialect(), 'DAYOFWEEK('),
])
def test_day_of_week_sql_per_dialect(dialect, fragment):
    compiled = str(select(sql_day_of_week(literal(date(2024, 1, 7)))).compile(dialect=dialect))

    assert fragment in compiled
