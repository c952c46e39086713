"""BudgetPeriod model and period lifecycle states."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Union

from models.common import contains, new_id, to_money, utc_now

if TYPE_CHECKING:
    from models.period_record import PeriodRecord


class PeriodType(str, Enum):
    """How period boundaries recur.

    FIXED_DATE: runs from a fixed day-of-month to the same day next month.
    INCOME_ANCHORED: runs monthly from an income date.
    """

    FIXED_DATE = "FIXED_DATE"
    INCOME_ANCHORED = "INCOME_ANCHORED"


@dataclass
class BudgetPeriod:
    """A bounded [start_date, end_date) interval over which spending is tracked.

    Attributes:
        user_id: Owner of the period.
        account_id: Account the period belongs to.
        start_date: First day of the period (inclusive).
        end_date: Day after the last day of the period (exclusive).
        starting_balance: Account balance when the period was opened.
        period_type: Recurrence policy used to compute the bounds.
        anchor_date: Reference date for the recurrence.
        period_id: Unique identifier (UUID).
        created_at: Creation timestamp.
    """

    user_id: str
    account_id: str
    start_date: date
    end_date: date
    starting_balance: Decimal
    period_type: PeriodType
    anchor_date: date
    period_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)

    def contains(self, day: date) -> bool:
        """Check whether a day falls in this period (inclusive start, exclusive end)."""
        return contains(self.start_date, self.end_date, day)

    def overlaps(self, start_date: date, end_date: date) -> bool:
        """Check whether [start_date, end_date) shares any day with this period."""
        return start_date < self.end_date and self.start_date < end_date

    def to_dict(self) -> dict:
        """Convert period to dictionary for document storage."""
        return {
            "period_id": self.period_id,
            "user_id": self.user_id,
            "account_id": self.account_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "starting_balance": str(self.starting_balance),
            "period_type": self.period_type.value,
            "anchor_date": self.anchor_date.isoformat(),
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BudgetPeriod":
        return cls(
            period_id=data["period_id"],
            user_id=data["user_id"],
            account_id=data["account_id"],
            start_date=date.fromisoformat(data["start_date"]),
            end_date=date.fromisoformat(data["end_date"]),
            starting_balance=to_money(data["starting_balance"]),
            period_type=PeriodType(data["period_type"]),
            anchor_date=date.fromisoformat(data["anchor_date"]),
            created_at=datetime.fromisoformat(data["created_at"]),
        )


@dataclass(frozen=True)
class NoPeriod:
    """No period covers today for the account."""

    writable = False


@dataclass(frozen=True)
class Active:
    """The record's interval contains today; transactions may be added or changed."""

    record: "PeriodRecord"
    writable = True


@dataclass(frozen=True)
class Historical:
    """The record does not contain today (normally it has ended); it is read-only history."""

    record: "PeriodRecord"
    writable = False


PeriodState = Union[NoPeriod, Active, Historical]
