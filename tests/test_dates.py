from __future__ import annotations

import datetime

import pytest

from pont.dates import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    add_days,
    check_year,
    date_equals,
    days_of_year,
    is_weekend,
    make_date,
    parse_date,
    weekday,
)
from pont.errors import InvalidDate, InvalidYear


class TestClassification:
    def test_weekday_is_sunday_first(self) -> None:
        assert weekday(datetime.date(2025, 1, 5)) == SUNDAY
        assert weekday(datetime.date(2025, 1, 6)) == MONDAY
        assert weekday(datetime.date(2025, 1, 10)) == FRIDAY
        assert weekday(datetime.date(2025, 1, 11)) == SATURDAY

    def test_is_weekend(self) -> None:
        assert is_weekend(datetime.date(2025, 1, 4)) is True  # Saturday
        assert is_weekend(datetime.date(2025, 1, 5)) is True  # Sunday
        assert is_weekend(datetime.date(2025, 1, 6)) is False  # Monday

    def test_date_equals_ignores_time_of_day(self) -> None:
        morning = datetime.datetime(2025, 3, 30, 1, 0)
        evening = datetime.datetime(2025, 3, 30, 23, 0)
        assert date_equals(morning, evening)
        assert date_equals(morning, datetime.date(2025, 3, 30))
        assert not date_equals(datetime.date(2025, 3, 30), datetime.date(2025, 3, 31))


class TestArithmetic:
    def test_add_days_forward_and_back(self) -> None:
        d = datetime.date(2025, 1, 1)
        assert add_days(d, -1) == datetime.date(2024, 12, 31)
        assert add_days(d, 31) == datetime.date(2025, 2, 1)
        assert add_days(d, 0) == d

    def test_add_days_out_of_range(self) -> None:
        with pytest.raises(InvalidDate):
            add_days(datetime.date.min, -1)


class TestParsing:
    def test_parse_iso_string(self) -> None:
        assert parse_date("2024-02-29") == datetime.date(2024, 2, 29)

    def test_parse_strips_whitespace(self) -> None:
        assert parse_date(" 2025-07-14 ") == datetime.date(2025, 7, 14)

    def test_parse_datetime_truncates(self) -> None:
        assert parse_date(datetime.datetime(2025, 1, 1, 23, 30)) == datetime.date(2025, 1, 1)

    @pytest.mark.parametrize(
        "value",
        ["2025-02-31", "2025-13-01", "2025/01/01", "20250101", "", "not a date", None, 20250101],
    )
    def test_parse_rejects_invalid(self, value: object) -> None:
        with pytest.raises(InvalidDate):
            parse_date(value)

    def test_invalid_date_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            make_date(2025, 2, 29)


class TestYears:
    def test_days_of_year_common(self) -> None:
        days = list(days_of_year(2025))
        assert len(days) == 365
        assert days[0] == datetime.date(2025, 1, 1)
        assert days[-1] == datetime.date(2025, 12, 31)

    def test_days_of_year_leap(self) -> None:
        assert len(list(days_of_year(2024))) == 366

    def test_check_year_accepts_int(self) -> None:
        assert check_year(2025) == 2025

    @pytest.mark.parametrize("value", ["2025", 2025.0, True, 0, datetime.MAXYEAR])
    def test_check_year_rejects(self, value: object) -> None:
        with pytest.raises(InvalidYear):
            check_year(value)
