from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from vehicle_common.models import Expense, ExpenseType


def build_expense(
    amount: float,
    type: str = "parking",
    on: date = date(2024, 1, 15),
    description: Optional[str] = None,
    expense_id: Optional[str] = None,
) -> Expense:
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Expense(
        id=expense_id or f"{type}-{amount}-{on.isoformat()}",
        amount=amount,
        type=ExpenseType(type),
        date=on,
        description=description,
        created_at=stamp,
        updated_at=stamp,
    )
