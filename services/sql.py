"""
SQL Helpers

Dialect-aware SQL expressions used by the query services.
"""

from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement
from sqlalchemy.types import Integer


class day_of_week(FunctionElement):
    """
    Weekday of a DATE column as an integer, 0 = Sunday through 6 = Saturday.

    Usage:
        session.query(day_of_week(MealEntry.date_cooked))
    """
    type = Integer()
    name = 'day_of_week'
    inherit_cache = True


@compiles(day_of_week)
def _day_of_week_default(element, compiler, **kw):
    # PostgreSQL and other EXTRACT(DOW) dialects already number Sunday as 0
    return "CAST(EXTRACT(DOW FROM %s) AS INTEGER)" % compiler.process(element.clauses, **kw)


@compiles(day_of_week, 'sqlite')
def _day_of_week_sqlite(element, compiler, **kw):
    return "CAST(strftime('%%w', %s) AS INTEGER)" % compiler.process(element.clauses, **kw)


@compiles(day_of_week, 'mysql')
def _day_of_week_mysql(element, compiler, **kw):
    # DAYOFWEEK() is 1 = Sunday
    return "(DAYOFWEEK(%s) - 1)" % compiler.process(element.clauses, **kw)
