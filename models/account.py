from dataclasses import dataclass, field
from datetime import datetime

from models.common import new_id, utc_now


@dataclass
class Account:
    user_id: str
    bank_name: str  # e.g., "Barclays"
    account_name: str  # e.g., "Current Account"
    currency: str  # ISO 4217, e.g., "GBP"
    account_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        """Convert account to dictionary for document storage."""
        return {
            "account_id": self.account_id,
            "user_id": self.user_id,
            "bank_name": self.bank_name,
            "account_name": self.account_name,
            "currency": self.currency,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        return cls(
            account_id=data["account_id"],
            user_id=data["user_id"],
            bank_name=data["bank_name"],
            account_name=data["account_name"],
            currency=data["currency"],
            created_at=datetime.fromisoformat(data["created_at"]),
        )
