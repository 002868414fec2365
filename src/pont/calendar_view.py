"""Text rendering of optimization results.

Nothing here allocates leave; it only lays out what the optimizer chose.
"""

from __future__ import annotations

import calendar
import datetime

from pont.dates import WEEKDAY_NAMES
from pont.holidays import HolidayIndex
from pont.optimizer import LeaveReason, OptimizationResult, rest_blocks, total_rest_days

REASON_MARKS: dict[LeaveReason, str] = {
    LeaveReason.BRIDGE: "B",
    LeaveReason.WEEK_FILL: "W",
    LeaveReason.GAP: "G",
}
HOLIDAY_MARK = "H"

_WIDTH = 64


def month_matrix(year: int, month: int) -> list[list[datetime.date | None]]:
    """Lay out *month* as Sunday-first weeks of seven cells.

    Cells outside the month are ``None``.
    """
    cal = calendar.Calendar(firstweekday=6)
    return [
        [d if d.month == month else None for d in week]
        for week in cal.monthdatescalendar(year, month)
    ]


def format_result(result: OptimizationResult, holidays: HolidayIndex) -> str:
    """Return a human-readable summary of an optimization result."""
    lines: list[str] = []
    w = _WIDTH

    blocks = rest_blocks(result, holidays)
    rest = total_rest_days(blocks)

    lines.append("")
    lines.append("=" * w)
    lines.append(f"  LEAVE PLAN {result.year}")
    lines.append("=" * w)
    lines.append(f"  Leave days used: {result.used_count} / {result.quota}")
    lines.append(f"  Remaining quota: {result.remaining_quota}")
    for reason in LeaveReason:
        lines.append(f"    {reason.value + ':':<10} {len(result.by_reason(reason))}")
    lines.append(f"  Total rest days: {rest}")
    if result.used_count > 0:
        lines.append(f"  Efficiency: {rest / result.used_count:.1f}x (rest days per leave day)")
    lines.append("")

    lines.append("  Rest Blocks:")
    lines.append("  " + "-" * (w - 4))
    for i, block in enumerate(blocks, 1):
        n = block.total_days
        day_word = "day" if n == 1 else "days"
        if block.start_date == block.end_date:
            dr = block.start_date.strftime("%a, %b %d")
        else:
            dr = (
                f"{block.start_date.strftime('%a, %b %d')} -> "
                f"{block.end_date.strftime('%a, %b %d')}"
            )
        lines.append(f"  {i:>2}. {dr}  ({n} {day_word})")

        parts = [f"{block.leave_days} leave"]
        if block.holidays:
            parts.append(f"{block.holidays} holiday{'s' if block.holidays > 1 else ''}")
        if block.weekend_days:
            parts.append(f"{block.weekend_days} weekend")
        lines.append(f"      {' + '.join(parts)}")
    lines.append("")

    lines.append("  Days to request off:")
    for ld in result.leave_days:
        lines.append(f"    -> {ld.date.strftime('%A, %B %d, %Y')}  [{ld.reason.value}]")

    return "\n".join(lines)


def format_month(
    result: OptimizationResult, holidays: HolidayIndex, month: int
) -> list[str]:
    """Render one month grid; each cell is the day number plus its mark."""
    year = result.year
    reasons = {ld.date: ld.reason for ld in result.leave_days}

    lines = [f"  {calendar.month_name[month]} {year}"]
    lines.append("  " + "  ".join(name[:2] for name in WEEKDAY_NAMES))

    for week in month_matrix(year, month):
        row = ""
        for d in week:
            if d is None:
                row += "    "
            elif d in reasons:
                row += f" {d.day:>2}{REASON_MARKS[reasons[d]]}"
            elif holidays.is_holiday(d):
                row += f" {d.day:>2}{HOLIDAY_MARK}"
            else:
                row += f"  {d.day:>2}"
        lines.append(row)

    return lines


def format_calendar_view(
    result: OptimizationResult,
    holidays: HolidayIndex,
    months: list[int] | None = None,
) -> str:
    """Return month-by-month grids marking leave days and holidays.

    Without *months*, only months holding leave days or holidays are shown.
    """
    if months is None:
        active = {d.month for d in result.dates}
        active.update(h.date.month for h in holidays.in_year(result.year))
        months = sorted(active)

    if not months:
        return ""

    lines: list[str] = [
        "",
        f"  Calendar View {result.year}",
        "  Legend: B=Bridge  W=Week fill  G=Gap  H=Holiday",
        "",
    ]
    for month in months:
        lines.extend(format_month(result, holidays, month))
        lines.append("")

    return "\n".join(lines)
