"""Leave optimizer.

Spend a yearly quota of paid leave days on bridges between public holidays
and weekends, then on whole free weeks, then on the earliest free days.
"""

from pont.errors import InvalidDate, InvalidYear, NegativeQuota, PontError
from pont.holidays import Holiday, HolidayIndex, get_holidays, parse_holidays
from pont.optimizer import (
    LeaveDay,
    LeaveOptimizer,
    LeaveReason,
    OptimizationResult,
    RestBlock,
    optimize,
    rest_blocks,
)

__all__ = [
    "Holiday",
    "HolidayIndex",
    "InvalidDate",
    "InvalidYear",
    "LeaveDay",
    "LeaveOptimizer",
    "LeaveReason",
    "NegativeQuota",
    "OptimizationResult",
    "PontError",
    "RestBlock",
    "get_holidays",
    "optimize",
    "parse_holidays",
    "rest_blocks",
]
