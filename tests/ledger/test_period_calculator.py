from datetime import date

import pytest

from ledger.period_calculator import (
    PeriodBounds,
    compute_bounds,
    contains,
    day_in_month,
    shift_months,
)
from models.budget_period import BudgetPeriod, PeriodType


class TestFixedDate:
    """Tests for FIXED_DATE period bounds."""

    def test_after_anchor_day(self):
        """Test that a day after the anchor day starts the period this month."""
        bounds = compute_bounds(date(2024, 12, 20), PeriodType.FIXED_DATE, date(2024, 12, 1))

        assert bounds == PeriodBounds(date(2024, 12, 1), date(2025, 1, 1))

    def test_on_anchor_day_is_inclusive(self):
        """Test that the anchor day itself belongs to the new period."""
        bounds = compute_bounds(date(2024, 12, 1), PeriodType.FIXED_DATE, date(2024, 12, 1))

        assert bounds == PeriodBounds(date(2024, 12, 1), date(2025, 1, 1))

    def test_before_anchor_day(self):
        """Test that a day before the anchor day is in last month's period."""
        bounds = compute_bounds(date(2024, 3, 10), PeriodType.FIXED_DATE, date(2023, 7, 15))

        assert bounds == PeriodBounds(date(2024, 2, 15), date(2024, 3, 15))

    def test_before_anchor_day_in_january(self):
        """Test that the previous period crosses the year boundary."""
        bounds = compute_bounds(date(2025, 1, 5), PeriodType.FIXED_DATE, date(2024, 1, 15))

        assert bounds == PeriodBounds(date(2024, 12, 15), date(2025, 1, 15))

    def test_only_day_of_anchor_is_used(self):
        """Test that the anchor's month and year are irrelevant."""
        a = compute_bounds(date(2024, 6, 20), PeriodType.FIXED_DATE, date(2020, 1, 15))
        b = compute_bounds(date(2024, 6, 20), PeriodType.FIXED_DATE, date(2024, 11, 15))

        assert a == b == PeriodBounds(date(2024, 6, 15), date(2024, 7, 15))

    def test_day_31_clamped_in_february(self):
        """Test that a 31st anchor is clamped to the end of February."""
        bounds = compute_bounds(date(2024, 2, 29), PeriodType.FIXED_DATE, date(2024, 1, 31))

        assert bounds == PeriodBounds(date(2024, 2, 29), date(2024, 3, 31))

    def test_day_31_before_clamped_end(self):
        """Test the period leading up to a clamped boundary."""
        bounds = compute_bounds(date(2023, 2, 27), PeriodType.FIXED_DATE, date(2023, 1, 31))

        assert bounds == PeriodBounds(date(2023, 1, 31), date(2023, 2, 28))

    def test_day_31_in_thirty_day_month(self):
        """Test that the 30th of a 30-day month starts the period for a 31st anchor."""
        bounds = compute_bounds(date(2024, 4, 30), PeriodType.FIXED_DATE, date(2024, 1, 31))

        assert bounds == PeriodBounds(date(2024, 4, 30), date(2024, 5, 31))

    def test_periods_are_contiguous(self):
        """Test that the day a period ends computes the following period."""
        anchor = date(2024, 1, 31)
        bounds = compute_bounds(date(2024, 1, 31), PeriodType.FIXED_DATE, anchor)

        for _ in range(13):
            following = compute_bounds(bounds.end_date, PeriodType.FIXED_DATE, anchor)
            assert following.start_date == bounds.end_date
            bounds = following

    def test_accepts_string_period_type(self):
        """Test that the period type may be given as its string value."""
        bounds = compute_bounds(date(2024, 12, 20), "FIXED_DATE", date(2024, 12, 1))

        assert bounds.start_date == date(2024, 12, 1)


class TestIncomeAnchored:
    """Tests for INCOME_ANCHORED period bounds."""

    def test_before_anchor(self):
        """Test that a day before the anchor is in the month leading up to it."""
        bounds = compute_bounds(
            date(2024, 12, 20), PeriodType.INCOME_ANCHORED, date(2024, 12, 25)
        )

        assert bounds == PeriodBounds(date(2024, 11, 25), date(2024, 12, 25))

    def test_after_anchor(self):
        """Test that a day after the anchor starts the period at the anchor."""
        bounds = compute_bounds(
            date(2024, 12, 26), PeriodType.INCOME_ANCHORED, date(2024, 12, 25)
        )

        assert bounds == PeriodBounds(date(2024, 12, 25), date(2025, 1, 25))

    def test_on_anchor(self):
        """Test that the anchor date is the inclusive start."""
        bounds = compute_bounds(
            date(2024, 12, 25), PeriodType.INCOME_ANCHORED, date(2024, 12, 25)
        )

        assert bounds.start_date == date(2024, 12, 25)

    def test_steps_forward_whole_months(self):
        """Test that an old anchor is stepped forward to the period containing today."""
        bounds = compute_bounds(
            date(2025, 3, 30), PeriodType.INCOME_ANCHORED, date(2024, 12, 25)
        )

        assert bounds == PeriodBounds(date(2025, 3, 25), date(2025, 4, 25))

    def test_steps_backward_whole_months(self):
        """Test that a future anchor is stepped backward to the period containing today."""
        bounds = compute_bounds(
            date(2024, 9, 1), PeriodType.INCOME_ANCHORED, date(2024, 12, 25)
        )

        assert bounds == PeriodBounds(date(2024, 8, 25), date(2024, 9, 25))

    def test_clamping_does_not_drift(self):
        """Test that a 31st anchor returns to the 31st after a short month."""
        anchor = date(2024, 1, 31)

        february = compute_bounds(date(2024, 3, 1), PeriodType.INCOME_ANCHORED, anchor)
        march = compute_bounds(date(2024, 4, 1), PeriodType.INCOME_ANCHORED, anchor)

        assert february == PeriodBounds(date(2024, 2, 29), date(2024, 3, 31))
        assert march == PeriodBounds(date(2024, 3, 31), date(2024, 4, 30))

    @pytest.mark.parametrize(
        "today",
        [date(2023, 1, 1), date(2024, 2, 28), date(2024, 12, 24), date(2026, 7, 4)],
    )
    def test_result_contains_today(self, today):
        """Test that the computed interval always contains today."""
        bounds = compute_bounds(today, PeriodType.INCOME_ANCHORED, date(2024, 12, 25))

        assert bounds.contains(today)


class TestHelpers:
    """Tests for the date helpers."""

    def test_contains_is_half_open(self):
        """Test inclusive start and exclusive end."""
        start, end = date(2024, 12, 1), date(2025, 1, 1)

        assert contains(start, end, date(2024, 12, 1))
        assert contains(start, end, date(2024, 12, 31))
        assert not contains(start, end, date(2025, 1, 1))
        assert not contains(start, end, date(2024, 11, 30))

    def test_period_and_bounds_agree(self):
        """Test that stored periods use the same half-open rule as computed bounds."""
        bounds = compute_bounds(date(2024, 12, 20), PeriodType.FIXED_DATE, date(2024, 12, 1))
        period = BudgetPeriod(
            user_id="user-1",
            account_id="account-1",
            start_date=bounds.start_date,
            end_date=bounds.end_date,
            starting_balance=0,
            period_type=PeriodType.FIXED_DATE,
            anchor_date=date(2024, 12, 1),
        )

        for day in [date(2024, 11, 30), date(2024, 12, 1), date(2024, 12, 31), date(2025, 1, 1)]:
            assert period.contains(day) == bounds.contains(day)
        assert not period.contains(period.end_date)

    def test_day_in_month_clamps(self):
        """Test that days past the end of the month are clamped."""
        assert day_in_month(2023, 2, 31) == date(2023, 2, 28)
        assert day_in_month(2024, 2, 30) == date(2024, 2, 29)
        assert day_in_month(2024, 5, 15) == date(2024, 5, 15)

    def test_shift_months_clamps(self):
        """Test month shifting from the end of a month."""
        assert shift_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert shift_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
        assert shift_months(date(2024, 12, 25), 1) == date(2025, 1, 25)
