"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal

from models.transaction import IncomingTransaction, Transaction


def make_transaction(
    external_id: str,
    amount: str = "-10.00",
    category_id: str = "default",
    day: date = date(2024, 12, 10),
    period_id: str = "period-1",
) -> Transaction:
    """Build a Transaction with sensible defaults."""
    return Transaction(
        external_id=external_id,
        account_id="account-1",
        user_id="user-1",
        period_id=period_id,
        date=day,
        amount=Decimal(amount),
        merchant_name=f"Merchant {external_id}",
        description=f"Card payment {external_id}",
        category_id=category_id,
    )


def make_incoming(
    external_id: str, amount: str = "-10.00", day: date = date(2024, 12, 10)
) -> IncomingTransaction:
    """Build an IncomingTransaction as delivered by the feed."""
    return IncomingTransaction(
        external_id=external_id,
        date=day,
        amount=Decimal(amount),
        merchant_name=f"Merchant {external_id}",
        description=f"Card payment {external_id}",
    )
