from dataclasses import dataclass, field
from datetime import datetime

from models.common import new_id, utc_now


@dataclass
class User:
    user_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        """Convert user to dictionary for document storage."""
        return {
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            user_id=data["user_id"],
            created_at=datetime.fromisoformat(data["created_at"]),
        )
