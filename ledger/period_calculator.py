"""Budget period boundary calculations.

Periods are half-open intervals: start_date is inclusive, end_date is exclusive.

When the anchor's day-of-month does not exist in a target month (e.g. the 31st
in February) the boundary is clamped to the last day of that month. Month
steps are always taken from the anchor itself, so the clamping never
accumulates: an anchor on Jan 31 yields Feb 29 (or 28), then Mar 31.
"""

import calendar
from dataclasses import dataclass
from datetime import date

from dateutil.relativedelta import relativedelta

from models.budget_period import PeriodType
from models.common import contains


@dataclass(frozen=True)
class PeriodBounds:
    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return contains(self.start_date, self.end_date, day)


def day_in_month(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the length of the month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def shift_months(anchor: date, months: int) -> date:
    """Move an anchor by whole months, keeping its day-of-month where possible."""
    # relativedelta clamps to the last day of the target month
    return anchor + relativedelta(months=months)


def compute_bounds(today: date, period_type: PeriodType, anchor_date: date) -> PeriodBounds:
    """Compute the period that contains today.

    Args:
        today: Reference date, usually the current date.
        period_type: FIXED_DATE or INCOME_ANCHORED.
        anchor_date: For FIXED_DATE only the day-of-month is used; for
            INCOME_ANCHORED the full date is the start of a period.

    Returns:
        PeriodBounds with start_date <= today < end_date.
    """
    period_type = PeriodType(period_type)
    if period_type == PeriodType.FIXED_DATE:
        return _fixed_date_bounds(today, anchor_date.day)
    return _income_anchored_bounds(today, anchor_date)


def _fixed_date_bounds(today: date, day_of_month: int) -> PeriodBounds:
    this_month = day_in_month(today.year, today.month, day_of_month)

    if today >= this_month:
        following = today.replace(day=1) + relativedelta(months=1)
        end = day_in_month(following.year, following.month, day_of_month)
        return PeriodBounds(this_month, end)

    previous = today.replace(day=1) - relativedelta(months=1)
    start = day_in_month(previous.year, previous.month, day_of_month)
    return PeriodBounds(start, this_month)


def _income_anchored_bounds(today: date, anchor_date: date) -> PeriodBounds:
    # Whole-month offset of the period containing today, relative to the anchor.
    offset = (today.year - anchor_date.year) * 12 + (today.month - anchor_date.month)
    start = shift_months(anchor_date, offset)
    if start > today:
        offset -= 1
        start = shift_months(anchor_date, offset)
    return PeriodBounds(start, shift_months(anchor_date, offset + 1))
