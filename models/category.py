"""Category model for spending limits."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from models.common import new_id, to_money, utc_now

DEFAULT_CATEGORY_NAME = "Other"


@dataclass
class Category:
    """Represents a user-defined spending category.

    Attributes:
        user_id: Owner of the category.
        name: Display name, e.g. "Groceries".
        monthly_limit: Spending limit per period in account currency.
        is_default: True only for the catch-all "Other" category.
        category_id: Unique identifier (UUID).
        created_at: Creation timestamp.
        archived_at: Set when the category is archived; categories are never deleted.
    """

    user_id: str
    name: str
    monthly_limit: Decimal
    is_default: bool = False
    category_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    archived_at: Optional[datetime] = None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    @classmethod
    def create_default(cls, user_id: str) -> "Category":
        """Create the catch-all category every user has."""
        return cls(
            user_id=user_id,
            name=DEFAULT_CATEGORY_NAME,
            monthly_limit=Decimal("0"),
            is_default=True,
        )

    def to_dict(self) -> dict:
        """Convert category to dictionary for document storage."""
        return {
            "category_id": self.category_id,
            "user_id": self.user_id,
            "name": self.name,
            "monthly_limit": str(self.monthly_limit),
            "is_default": self.is_default,
            "created_at": self.created_at.isoformat(),
            "archived_at": self.archived_at.isoformat() if self.archived_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(
            category_id=data["category_id"],
            user_id=data["user_id"],
            name=data["name"],
            monthly_limit=to_money(data["monthly_limit"]),
            is_default=bool(data.get("is_default", False)),
            created_at=datetime.fromisoformat(data["created_at"]),
            archived_at=(
                datetime.fromisoformat(data["archived_at"])
                if data.get("archived_at")
                else None
            ),
        )


@dataclass(frozen=True)
class CategorySummary:
    """Spending against one category's limit within a period.

    Recomputed on demand and never stored.
    """

    category_id: str
    name: str
    monthly_limit: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: int

    def to_dict(self) -> dict:
        return {
            "category_id": self.category_id,
            "name": self.name,
            "monthly_limit": float(self.monthly_limit),
            "spent": float(self.spent),
            "remaining": float(self.remaining),
            "percentage": self.percentage,
        }
