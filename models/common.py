"""Helpers shared by the model dataclasses."""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal


def new_id() -> str:
    """Generate a new entity identifier (UUID4 string)."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_money(value) -> Decimal:
    """Convert a JSON number (or string) to Decimal without float artifacts."""
    return Decimal(str(value))


def contains(start_date: date, end_date: date, day: date) -> bool:
    """Check if a day falls within the half-open interval [start_date, end_date)."""
    return start_date <= day < end_date
