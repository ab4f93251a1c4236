"""Data models for the vehicle expense domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

__all__ = ["Expense", "ExpenseType", "isoformat_utc", "parse_datetime"]


def isoformat_utc(dt: datetime) -> str:
    """Return an ISO 8601 string with trailing Z for UTC-aware datetimes."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    iso = dt.isoformat(timespec="seconds")
    # datetime.isoformat renders +00:00 for UTC; replace with the shorter Z form.
    return iso.replace("+00:00", "Z")


def parse_datetime(value: str) -> datetime:
    """Parse ISO 8601 datetime strings with optional trailing Z into UTC-aware datetime."""
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        # Treat naive datetimes as UTC to avoid accidental timezone drift.
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class ExpenseType(str, Enum):
    PARKING = "parking"
    VIOLATION = "violation"
    GASOLINE = "gasoline"
    MAINTENANCE = "maintenance"
    TOLL = "toll"

    @property
    def label(self) -> str:
        if self is ExpenseType.VIOLATION:
            return "Traffic Violation"
        return self.value.capitalize()

    @classmethod
    def values(cls) -> tuple:
        return tuple(member.value for member in cls)


@dataclass(frozen=True)
class Expense:
    """Client-facing expense with plain numeric and date values."""

    id: str
    amount: float
    type: ExpenseType
    date: date
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "id": self.id,
            "amount": self.amount,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "description": self.description,
            "created_at": isoformat_utc(self.created_at),
            "updated_at": isoformat_utc(self.updated_at),
        }
