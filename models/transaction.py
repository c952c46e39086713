from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from models.common import new_id, to_money, utc_now


@dataclass(frozen=True)
class IncomingTransaction:
    """A normalized record from the banking feed, before it joins a period.

    Attributes:
        external_id: Identifier assigned by the feed; the deduplication key.
        date: Booking date.
        amount: Signed amount, negative for spending.
        merchant_name: e.g., "Tesco".
        description: Full description from the bank.
        original_category: Category supplied by the feed, if any.
    """

    external_id: str
    date: date
    amount: Decimal
    merchant_name: str
    description: str
    original_category: Optional[str] = None


@dataclass
class Transaction:
    external_id: str  # feed identifier, unique within a period
    account_id: str
    user_id: str
    period_id: str
    date: date
    amount: Decimal  # negative = expense, positive = income
    merchant_name: str
    description: str
    category_id: str
    original_category: Optional[str] = None
    is_manual_override: bool = False
    transaction_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.updated_at is None:
            self.updated_at = self.created_at

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @classmethod
    def from_incoming(
        cls,
        incoming: IncomingTransaction,
        user_id: str,
        account_id: str,
        period_id: str,
        default_category_id: str,
    ) -> "Transaction":
        """Create a Transaction from a feed record, assigned to the default category."""
        return cls(
            external_id=incoming.external_id,
            account_id=account_id,
            user_id=user_id,
            period_id=period_id,
            date=incoming.date,
            amount=incoming.amount,
            merchant_name=incoming.merchant_name,
            description=incoming.description,
            category_id=default_category_id,
            original_category=incoming.original_category,
        )

    def to_dict(self) -> dict:
        """Convert transaction to dictionary for document storage."""
        return {
            "transaction_id": self.transaction_id,
            "external_id": self.external_id,
            "account_id": self.account_id,
            "user_id": self.user_id,
            "period_id": self.period_id,
            "date": self.date.isoformat(),
            "amount": str(self.amount),
            "merchant_name": self.merchant_name,
            "description": self.description,
            "category_id": self.category_id,
            "original_category": self.original_category,
            "is_manual_override": self.is_manual_override,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        return cls(
            transaction_id=data["transaction_id"],
            external_id=data["external_id"],
            account_id=data["account_id"],
            user_id=data["user_id"],
            period_id=data["period_id"],
            date=date.fromisoformat(data["date"]),
            amount=to_money(data["amount"]),
            merchant_name=data.get("merchant_name", ""),
            description=data.get("description", ""),
            category_id=data["category_id"],
            original_category=data.get("original_category"),
            is_manual_override=bool(data.get("is_manual_override", False)),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
