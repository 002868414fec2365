"""Public holidays: records, the date-keyed index, and built-in presets.

Holiday lists normally come from a public-holiday API and look like::

    [{"date": "2025-05-01", "localName": "Fête du Travail", ...}, ...]

``parse_holidays`` turns such records into ``Holiday`` values, dropping any
record whose date is unusable.  ``HolidayIndex`` answers "is this day a
holiday" in constant time.

The presets cover national holidays of the countries the planner ships
with.  Movable feasts are derived from Gregorian Easter.
"""

from __future__ import annotations

import datetime
import json
import logging
import pathlib
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import NamedTuple

from pont.dates import add_days, parse_date
from pont.errors import HolidaySourceError, InvalidDate

LOG = logging.getLogger(__name__)


class Holiday(NamedTuple):
    """A public holiday on a single calendar day."""

    date: datetime.date
    local_name: str


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------


class HolidayIndex:
    """Date-keyed lookup over an ordered holiday list.

    Only the first holiday seen for a given date is kept; later duplicates
    are ignored.  Iteration preserves the first-seen order of the input,
    which the bridge detector relies on.
    """

    def __init__(self, holidays: Iterable[Holiday] = ()):
        self._by_date: dict[datetime.date, Holiday] = {}
        for h in holidays:
            if h.date not in self._by_date:
                self._by_date[h.date] = h

    @classmethod
    def from_records(cls, records: Iterable[object]) -> HolidayIndex:
        return cls(parse_holidays(records))

    def is_holiday(self, d: datetime.date) -> bool:
        return d in self._by_date

    def holiday_for(self, d: datetime.date) -> Holiday | None:
        return self._by_date.get(d)

    def in_year(self, year: int) -> list[Holiday]:
        """Holidays falling in *year*, sorted by date."""
        return sorted(h for h in self._by_date.values() if h.date.year == year)

    def __contains__(self, d: object) -> bool:
        return d in self._by_date

    def __iter__(self) -> Iterator[Holiday]:
        return iter(self._by_date.values())

    def __len__(self) -> int:
        return len(self._by_date)

    def __repr__(self) -> str:
        return f"HolidayIndex({len(self)} holidays)"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _coerce(record: object) -> Holiday:
    if isinstance(record, Mapping):
        raw_date = record.get("date")
        name = record.get("localName") or record.get("local_name") or record.get("name") or ""
    elif isinstance(record, str):
        raise InvalidDate(f"Holiday record {record!r} has no name")
    else:
        try:
            raw_date, name = record  # type: ignore[misc]
        except (TypeError, ValueError):
            raise InvalidDate(f"Unrecognised holiday record {record!r}") from None
    return Holiday(parse_date(raw_date), str(name))


def parse_holidays(records: Iterable[object]) -> list[Holiday]:
    """Convert raw holiday records into ``Holiday`` values.

    Accepts API-style mappings (``date`` + ``localName``), ``Holiday``
    instances, or ``(date, name)`` pairs.  A record with a missing or invalid
    date is logged and dropped; the rest are returned in input order.
    """
    holidays: list[Holiday] = []
    for record in records:
        try:
            holidays.append(_coerce(record))
        except InvalidDate as exc:
            LOG.warning("Dropping holiday record %r: %s", record, exc)
    return holidays


def load_holidays_file(path: str | pathlib.Path) -> list[Holiday]:
    """Read a JSON list of holiday records from *path*."""
    p = pathlib.Path(path)
    if not p.exists():
        raise HolidaySourceError(f"Holiday file not found: {path}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise HolidaySourceError(f"Invalid JSON in holiday file: {exc}") from None

    if not isinstance(data, list):
        raise HolidaySourceError("Holiday file must contain a JSON list of records.")

    return parse_holidays(data)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def easter_sunday(year: int) -> datetime.date:
    """Gregorian Easter Sunday (anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return datetime.date(year, month, day + 1)


def _easter_offset(year: int, days: int) -> datetime.date:
    return add_days(easter_sunday(year), days)


# ---------------------------------------------------------------------------
# Country presets
# ---------------------------------------------------------------------------

PRESETS: dict[str, str] = {
    "be": "Belgium public holidays",
    "ch": "Switzerland public holidays",
    "de": "Germany national holidays",
    "fr": "France public holidays",
    "lu": "Luxembourg public holidays",
}


def france_holidays(year: int) -> list[tuple[datetime.date, str]]:
    return [
        (datetime.date(year, 1, 1), "Jour de l'an"),
        (_easter_offset(year, 1), "Lundi de Pâques"),
        (datetime.date(year, 5, 1), "Fête du Travail"),
        (datetime.date(year, 5, 8), "Victoire 1945"),
        (_easter_offset(year, 39), "Ascension"),
        (_easter_offset(year, 50), "Lundi de Pentecôte"),
        (datetime.date(year, 7, 14), "Fête nationale"),
        (datetime.date(year, 8, 15), "Assomption"),
        (datetime.date(year, 11, 1), "Toussaint"),
        (datetime.date(year, 11, 11), "Armistice 1918"),
        (datetime.date(year, 12, 25), "Noël"),
    ]


def belgium_holidays(year: int) -> list[tuple[datetime.date, str]]:
    return [
        (datetime.date(year, 1, 1), "Jour de l'An"),
        (_easter_offset(year, 1), "Lundi de Pâques"),
        (datetime.date(year, 5, 1), "Fête du Travail"),
        (_easter_offset(year, 39), "Ascension"),
        (_easter_offset(year, 50), "Lundi de Pentecôte"),
        (datetime.date(year, 7, 21), "Fête nationale"),
        (datetime.date(year, 8, 15), "Assomption"),
        (datetime.date(year, 11, 1), "Toussaint"),
        (datetime.date(year, 11, 11), "Jour de l'Armistice"),
        (datetime.date(year, 12, 25), "Noël"),
    ]


def switzerland_holidays(year: int) -> list[tuple[datetime.date, str]]:
    return [
        (datetime.date(year, 1, 1), "Neujahrstag"),
        (_easter_offset(year, -2), "Karfreitag"),
        (_easter_offset(year, 1), "Ostermontag"),
        (_easter_offset(year, 39), "Auffahrt"),
        (_easter_offset(year, 50), "Pfingstmontag"),
        (datetime.date(year, 8, 1), "Bundesfeier"),
        (datetime.date(year, 12, 25), "Weihnachtstag"),
        (datetime.date(year, 12, 26), "Stephanstag"),
    ]


def luxembourg_holidays(year: int) -> list[tuple[datetime.date, str]]:
    days = [
        (datetime.date(year, 1, 1), "Neijoerschdag"),
        (_easter_offset(year, 1), "Ouschterméindeg"),
        (datetime.date(year, 5, 1), "Dag vun der Aarbecht"),
        (_easter_offset(year, 39), "Christi Himmelfaart"),
        (_easter_offset(year, 50), "Péngschtméindeg"),
        (datetime.date(year, 6, 23), "Nationalfeierdag"),
        (datetime.date(year, 8, 15), "Léiffrawëschdag"),
        (datetime.date(year, 11, 1), "Allerhellgen"),
        (datetime.date(year, 12, 25), "Chrëschtdag"),
        (datetime.date(year, 12, 26), "Stiefesdag"),
    ]
    if year >= 2019:
        days.append((datetime.date(year, 5, 9), "Europadag"))
    return days


def germany_holidays(year: int) -> list[tuple[datetime.date, str]]:
    return [
        (datetime.date(year, 1, 1), "Neujahr"),
        (_easter_offset(year, -2), "Karfreitag"),
        (_easter_offset(year, 1), "Ostermontag"),
        (datetime.date(year, 5, 1), "Tag der Arbeit"),
        (_easter_offset(year, 39), "Christi Himmelfahrt"),
        (_easter_offset(year, 50), "Pfingstmontag"),
        (datetime.date(year, 10, 3), "Tag der Deutschen Einheit"),
        (datetime.date(year, 12, 25), "Erster Weihnachtstag"),
        (datetime.date(year, 12, 26), "Zweiter Weihnachtstag"),
    ]


_PRESET_FNS: dict[str, Callable[[int], list[tuple[datetime.date, str]]]] = {
    "be": belgium_holidays,
    "ch": switzerland_holidays,
    "de": germany_holidays,
    "fr": france_holidays,
    "lu": luxembourg_holidays,
}


def get_holidays(country: str, year: int) -> list[Holiday]:
    """Return the preset holidays for *country* in *year*, sorted by date.

    Two feasts can land on the same day (Ascension on May 1, for instance);
    both are returned and ``HolidayIndex`` keeps the first.

    Raises ``KeyError`` if the country is not supported.
    """
    fn = _PRESET_FNS.get(country.lower())
    if fn is None:
        supported = ", ".join(sorted(PRESETS))
        msg = f"Unknown country preset {country!r}. Supported: {supported}"
        raise KeyError(msg)
    return sorted((Holiday(d, name) for d, name in fn(year)), key=lambda h: h.date)
