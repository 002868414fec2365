from __future__ import annotations

import datetime

from pont.calendar_view import format_calendar_view, format_month, format_result, month_matrix
from pont.holidays import Holiday, HolidayIndex, get_holidays
from pont.optimizer import optimize

D = datetime.date


class TestMonthMatrix:
    def test_padding_before_first_day(self) -> None:
        # Jan 1 2025 is a Wednesday.
        matrix = month_matrix(2025, 1)
        assert matrix[0] == [None, None, None, D(2025, 1, 1), D(2025, 1, 2), D(2025, 1, 3), D(2025, 1, 4)]
        assert matrix[-1] == [D(2025, 1, d) for d in range(26, 32)] + [None]
        assert len(matrix) == 5

    def test_month_starting_on_sunday(self) -> None:
        matrix = month_matrix(2026, 2)
        assert len(matrix) == 4
        assert matrix[0][0] == D(2026, 2, 1)
        assert all(cell is not None for week in matrix for cell in week)

    def test_rows_are_weeks(self) -> None:
        for week in month_matrix(2025, 6):
            assert len(week) == 7
            days = [d for d in week if d is not None]
            for d in days:
                assert d.month == 6
            # Sunday-first: column index matches (weekday + 1) % 7.
            for col, d in enumerate(week):
                if d is not None:
                    assert (d.weekday() + 1) % 7 == col


class TestFormatting:
    def test_format_month_marks(self) -> None:
        index = HolidayIndex([Holiday(D(2025, 11, 11), "Armistice 1918")])
        result = optimize(2025, index, 1)
        lines = format_month(result, index, 11)
        text = "\n".join(lines)
        assert lines[0] == "  November 2025"
        assert lines[1] == "  Su  Mo  Tu  We  Th  Fr  Sa"
        assert " 10B" in text
        assert " 11H" in text
        assert "  12" in text

    def test_calendar_view_shows_active_months(self) -> None:
        index = HolidayIndex([Holiday(D(2025, 11, 11), "Armistice 1918")])
        result = optimize(2025, index, 2)
        output = format_calendar_view(result, index)
        assert "Calendar View 2025" in output
        assert "January 2025" in output
        assert "November 2025" in output
        assert "March 2025" not in output

    def test_calendar_view_explicit_months(self) -> None:
        index = HolidayIndex()
        result = optimize(2025, index, 0)
        assert format_calendar_view(result, index) == ""
        assert "March 2025" in format_calendar_view(result, index, months=[3])

    def test_format_result(self) -> None:
        index = HolidayIndex(get_holidays("fr", 2025))
        result = optimize(2025, index, 25)
        output = format_result(result, index)
        assert "LEAVE PLAN 2025" in output
        assert "Leave days used: 25 / 25" in output
        assert "Bridge:" in output
        assert "Rest Blocks:" in output
        assert "Monday, November 10, 2025  [Bridge]" in output
