"""Leave-day optimizer.

Spend a yearly quota of paid leave days so that holidays turn into long
weekends and free weeks turn into full breaks.

The allocation is a three-phase greedy pipeline over a single claimed-days
accumulator:

  1. Bridges    - a holiday on Tuesday claims the Monday before it, a
                  holiday on Thursday claims the Friday after it.
  2. Week fill  - whole free workweeks, five days at a time, stepping a week
                  at a time from January 1.
  3. Gap fill   - whatever quota is left goes to the earliest free weekdays.

Each phase only adds to what earlier phases claimed, and the result is a
pure function of ``(year, holidays, quota)``.
"""

from __future__ import annotations

import datetime
import enum
import logging
from collections.abc import Iterable
from typing import NamedTuple

from pont.dates import (
    THURSDAY,
    TUESDAY,
    add_days,
    check_year,
    days_of_year,
    is_weekend,
    weekday,
    year_bounds,
)
from pont.errors import NegativeQuota
from pont.holidays import HolidayIndex, parse_holidays

LOG = logging.getLogger(__name__)

DEFAULT_QUOTA = 25
WEEK_LENGTH = 5

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class LeaveReason(str, enum.Enum):
    """Why a day was claimed."""

    BRIDGE = "Bridge"
    WEEK_FILL = "WeekFill"
    GAP = "Gap"

    def __str__(self) -> str:
        return self.value


class LeaveDay(NamedTuple):
    """A calendar day spent as paid leave."""

    date: datetime.date
    reason: LeaveReason


class OptimizationResult(NamedTuple):
    """Leave days chosen for one year, sorted by date."""

    year: int
    quota: int
    leave_days: list[LeaveDay]
    used_count: int
    remaining_quota: int

    @property
    def dates(self) -> list[datetime.date]:
        return [ld.date for ld in self.leave_days]

    def by_reason(self, reason: LeaveReason) -> list[datetime.date]:
        return [ld.date for ld in self.leave_days if ld.reason is reason]

    def to_dict(self) -> dict[str, object]:
        return {
            "year": self.year,
            "quota": self.quota,
            "used_count": self.used_count,
            "remaining_quota": self.remaining_quota,
            "leave_days": [
                {"date": ld.date.isoformat(), "reason": ld.reason.value}
                for ld in self.leave_days
            ],
        }


class RestBlock(NamedTuple):
    """A contiguous run of days off that includes at least one leave day."""

    start_date: datetime.date
    end_date: datetime.date
    total_days: int
    leave_days: int
    holidays: int
    weekend_days: int


# ---------------------------------------------------------------------------
# Optimizer
# ---------------------------------------------------------------------------


class LeaveOptimizer:
    """Allocates a leave quota over one year of a holiday calendar.

    The instance only holds the inputs; every call to :meth:`optimize`
    starts from an empty claim set, so results never leak between calls.
    """

    def __init__(self, year: int, quota: int, holidays: HolidayIndex):
        self.year = check_year(year)
        if quota < 0:
            raise NegativeQuota(f"Leave quota must be >= 0, got {quota}")
        self.quota = quota
        self.holidays = holidays
        self.start_date, self.end_date = year_bounds(self.year)

    def _is_free_weekday(
        self, d: datetime.date, claimed: dict[datetime.date, LeaveReason]
    ) -> bool:
        return (
            d.year == self.year
            and not is_weekend(d)
            and d not in self.holidays
            and d not in claimed
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _claim_bridges(self, claimed: dict[datetime.date, LeaveReason]) -> None:
        """Claim the Monday before Tuesday holidays and the Friday after
        Thursday holidays, in holiday order."""
        for holiday in self.holidays:
            if len(claimed) >= self.quota:
                # Quota spent; nothing later in the list can be claimed.
                break

            wd = weekday(holiday.date)
            if wd == TUESDAY:
                offset = -1
            elif wd == THURSDAY:
                offset = 1
            else:
                continue

            candidate = add_days(holiday.date, offset)
            if (
                candidate.year == self.year
                and candidate not in self.holidays
                and candidate not in claimed
            ):
                claimed[candidate] = LeaveReason.BRIDGE
                LOG.debug("Bridge %s next to %s", candidate, holiday.local_name or holiday.date)

    def _claim_weeks(self, claimed: dict[datetime.date, LeaveReason]) -> None:
        """Claim whole five-day blocks, stepping a week at a time from
        January 1, while at least five days of quota remain."""
        d = self.start_date
        while self.quota - len(claimed) >= WEEK_LENGTH and d.year == self.year:
            week = [d + datetime.timedelta(days=i) for i in range(WEEK_LENGTH)]
            if all(self._is_free_weekday(day, claimed) for day in week):
                for day in week:
                    claimed[day] = LeaveReason.WEEK_FILL
                LOG.debug("Week fill %s -> %s", week[0], week[-1])
            d += datetime.timedelta(days=7)

    def _claim_gaps(self, claimed: dict[datetime.date, LeaveReason]) -> None:
        """Spend any remaining quota on the earliest free weekdays."""
        for d in days_of_year(self.year):
            if len(claimed) >= self.quota:
                break
            if self._is_free_weekday(d, claimed):
                claimed[d] = LeaveReason.GAP

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def optimize(self) -> OptimizationResult:
        claimed: dict[datetime.date, LeaveReason] = {}

        for phase in (self._claim_bridges, self._claim_weeks, self._claim_gaps):
            before = len(claimed)
            phase(claimed)
            LOG.debug(
                "%s claimed %d day(s); %d of %d left",
                phase.__name__.lstrip("_"),
                len(claimed) - before,
                self.quota - len(claimed),
                self.quota,
            )

        leave_days = [LeaveDay(d, claimed[d]) for d in sorted(claimed)]
        return OptimizationResult(
            year=self.year,
            quota=self.quota,
            leave_days=leave_days,
            used_count=len(leave_days),
            remaining_quota=self.quota - len(leave_days),
        )


def optimize(
    year: int,
    holidays: Iterable[object] | HolidayIndex,
    quota: int = DEFAULT_QUOTA,
) -> OptimizationResult:
    """Choose which days of *year* to spend as leave.

    *holidays* is an ordered iterable of holiday records (see
    :func:`pont.holidays.parse_holidays`) or a prebuilt ``HolidayIndex``.
    Records with invalid dates are dropped.  Raises ``NegativeQuota`` when
    *quota* is below zero and ``InvalidYear`` for an unusable *year*.
    """
    if isinstance(quota, bool) or not isinstance(quota, int):
        raise TypeError(f"Quota must be an integer, got {quota!r}")
    if quota < 0:
        raise NegativeQuota(f"Leave quota must be >= 0, got {quota}")
    year = check_year(year)

    # Built once; every phase answers holiday lookups from the same index.
    index = holidays if isinstance(holidays, HolidayIndex) else HolidayIndex(parse_holidays(holidays))
    return LeaveOptimizer(year, quota, index).optimize()


# ---------------------------------------------------------------------------
# Rest blocks
# ---------------------------------------------------------------------------


def rest_blocks(result: OptimizationResult, holidays: HolidayIndex) -> list[RestBlock]:
    """Group the year's days off into contiguous blocks.

    A day is off when it is a weekend, a holiday or a leave day.  Only
    blocks containing at least one leave day are returned, in date order.
    """
    leave = set(result.dates)
    blocks: list[RestBlock] = []
    run: list[datetime.date] = []

    def _close() -> None:
        if not run:
            return
        n_leave = sum(1 for d in run if d in leave)
        if n_leave:
            blocks.append(
                RestBlock(
                    start_date=run[0],
                    end_date=run[-1],
                    total_days=len(run),
                    leave_days=n_leave,
                    holidays=sum(1 for d in run if d in holidays),
                    weekend_days=sum(
                        1 for d in run if is_weekend(d) and d not in holidays
                    ),
                )
            )

    for d in days_of_year(result.year):
        if d in leave or is_weekend(d) or d in holidays:
            run.append(d)
        else:
            _close()
            run = []
    _close()

    return blocks


def total_rest_days(blocks: Iterable[RestBlock]) -> int:
    return sum(b.total_days for b in blocks)
