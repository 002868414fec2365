"""Day-granularity calendar primitives.

All values are plain ``datetime.date`` objects: immutable, totally ordered
and compared by (year, month, day).  Nothing here knows about time of day or
timezones.

Weekdays follow the Sunday-first convention used throughout the optimizer:
0 = Sunday … 6 = Saturday.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterator

from pont.errors import InvalidDate, InvalidYear

SUNDAY = 0
MONDAY = 1
TUESDAY = 2
WEDNESDAY = 3
THURSDAY = 4
FRIDAY = 5
SATURDAY = 6

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def weekday(d: datetime.date) -> int:
    """Return the weekday of *d*, 0 = Sunday … 6 = Saturday."""
    return (d.weekday() + 1) % 7


def is_weekend(d: datetime.date) -> bool:
    return weekday(d) in (SATURDAY, SUNDAY)


def date_equals(a: datetime.date, b: datetime.date) -> bool:
    """Value equality at day granularity.

    ``datetime.datetime`` is a subclass of ``date`` whose equality also looks
    at the time of day, so compare the calendar fields explicitly.
    """
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def make_date(year: int, month: int, day: int) -> datetime.date:
    try:
        return datetime.date(year, month, day)
    except (TypeError, ValueError) as exc:
        raise InvalidDate(f"Invalid date {year}-{month}-{day}: {exc}") from None


def parse_date(value: object) -> datetime.date:
    """Parse *value* into a ``date``.

    Accepts a ``date`` (a ``datetime`` is truncated to its day) or an ISO
    ``YYYY-MM-DD`` string.  Raises ``InvalidDate`` for anything else,
    including out-of-range days such as ``2025-02-31``.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise InvalidDate(f"Expected an ISO date string, got {value!r}")

    text = value.strip()
    # fromisoformat() also accepts week dates and compact forms on newer
    # interpreters; only YYYY-MM-DD is a valid holiday date.
    parts = text.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts) or len(parts[0]) != 4:
        raise InvalidDate(f"Invalid date format {value!r}. Use YYYY-MM-DD.")
    year, month, day = (int(p) for p in parts)
    return make_date(year, month, day)


def add_days(d: datetime.date, n: int) -> datetime.date:
    """Return *d* shifted by *n* days (*n* may be negative)."""
    try:
        return d + datetime.timedelta(days=n)
    except OverflowError:
        raise InvalidDate(f"{d.isoformat()} {n:+d} days is outside the calendar range") from None


# ---------------------------------------------------------------------------
# Year helpers
# ---------------------------------------------------------------------------


def check_year(year: object) -> int:
    """Validate *year* and return it as an ``int``.

    The last representable year is rejected because week windows and
    bridge candidates may look one day past December 31.
    """
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidYear(f"Year must be an integer, got {year!r}")
    if not datetime.MINYEAR <= year < datetime.MAXYEAR:
        raise InvalidYear(
            f"Year {year} is outside the supported range "
            f"{datetime.MINYEAR}..{datetime.MAXYEAR - 1}"
        )
    return year


def year_bounds(year: int) -> tuple[datetime.date, datetime.date]:
    """Return ``(January 1, December 31)`` of *year*."""
    return datetime.date(year, 1, 1), datetime.date(year, 12, 31)


def days_of_year(year: int) -> Iterator[datetime.date]:
    """Yield every day of *year* in ascending order."""
    start, end = year_bounds(year)
    for offset in range((end - start).days + 1):
        yield start + datetime.timedelta(days=offset)
