"""PeriodRecord: a period together with its transactions, the unit of persistence."""

from dataclasses import dataclass, field
from typing import Dict, List

from models.budget_period import BudgetPeriod
from models.transaction import Transaction


@dataclass
class PeriodRecord:
    """A BudgetPeriod and the transactions booked into it.

    Transactions are held keyed by transaction_id, in insertion order. The
    stored document keeps them as an array under "transactions".
    """

    period: BudgetPeriod
    transactions: Dict[str, Transaction] = field(default_factory=dict)

    @property
    def period_id(self) -> str:
        return self.period.period_id

    def transaction_list(self) -> List[Transaction]:
        return list(self.transactions.values())

    @staticmethod
    def index(transactions: List[Transaction]) -> Dict[str, Transaction]:
        """Key a list of transactions by transaction_id, keeping their order."""
        return {t.transaction_id: t for t in transactions}

    def to_dict(self) -> dict:
        return {
            "period": self.period.to_dict(),
            "transactions": [t.to_dict() for t in self.transactions.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PeriodRecord":
        transactions = [Transaction.from_dict(t) for t in data.get("transactions", [])]
        return cls(
            period=BudgetPeriod.from_dict(data["period"]),
            transactions=cls.index(transactions),
        )
