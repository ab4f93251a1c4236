"""Totals and chart series derived from the full expense list.

Everything here is a pure function of its inputs and is recomputed on every
call; nothing is cached.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from .exceptions import ValidationError
from .models import Expense, ExpenseType
from .validators import validate_expense_type

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
GRANULARITIES = ("month", "day")


@dataclass(frozen=True)
class ChartPoint:
    name: str
    amount: float

    def to_dict(self) -> Dict[str, object]:
        return {"name": self.name, "amount": self.amount}


@dataclass(frozen=True)
class OverviewSummary:
    total: float
    by_type: Dict[str, float]
    shares: Dict[str, float]

    def to_dict(self) -> Dict[str, object]:
        return {"total": self.total, "by_type": dict(self.by_type), "shares": dict(self.shares)}


def _round(amount: float) -> float:
    return round(amount, 2)


def _resolve_type(expense_type: Union[ExpenseType, str, None]) -> Optional[ExpenseType]:
    if expense_type is None or expense_type == "all":
        return None
    return validate_expense_type(expense_type)


def totals_by_type(expenses: Iterable[Expense]) -> Dict[str, float]:
    """Sum amounts per expense type, only for the types that occur."""
    sums: Dict[ExpenseType, float] = {}
    for expense in expenses:
        sums[expense.type] = sums.get(expense.type, 0.0) + expense.amount
    return {member.value: _round(sums[member]) for member in ExpenseType if member in sums}


def summarize(expenses: Iterable[Expense]) -> OverviewSummary:
    """Grand total plus per-type totals and percentage shares for every type."""
    present = totals_by_type(expenses)
    by_type = {member.value: present.get(member.value, 0.0) for member in ExpenseType}
    total = _round(sum(by_type.values()))
    if total > 0:
        shares = {key: round(value / total * 100, 1) for key, value in by_type.items()}
    else:
        shares = {key: 0.0 for key in by_type}
    return OverviewSummary(total=total, by_type=by_type, shares=shares)


def monthly_totals(
    expenses: Iterable[Expense],
    today: Optional[date] = None,
    expense_type: Union[ExpenseType, str, None] = None,
) -> List[ChartPoint]:
    """Twelve points, January to December, for the current year."""
    today = today or date.today()
    wanted = _resolve_type(expense_type)
    sums = [0.0] * 12
    for expense in expenses:
        if wanted is not None and expense.type is not wanted:
            continue
        if expense.date.year == today.year:
            sums[expense.date.month - 1] += expense.amount
    return [ChartPoint(name, _round(amount)) for name, amount in zip(MONTH_LABELS, sums)]


def daily_totals(
    expenses: Iterable[Expense],
    today: Optional[date] = None,
    expense_type: Union[ExpenseType, str, None] = None,
) -> List[ChartPoint]:
    """One point per calendar day of the current month."""
    today = today or date.today()
    wanted = _resolve_type(expense_type)
    days_in_month = calendar.monthrange(today.year, today.month)[1]
    sums = [0.0] * days_in_month
    for expense in expenses:
        if wanted is not None and expense.type is not wanted:
            continue
        if (expense.date.year, expense.date.month) == (today.year, today.month):
            sums[expense.date.day - 1] += expense.amount
    return [ChartPoint(str(day), _round(amount)) for day, amount in enumerate(sums, start=1)]


def chart_series(
    expenses: Iterable[Expense],
    granularity: str = "month",
    today: Optional[date] = None,
    expense_type: Union[ExpenseType, str, None] = None,
) -> List[ChartPoint]:
    if granularity == "month":
        return monthly_totals(expenses, today=today, expense_type=expense_type)
    if granularity == "day":
        return daily_totals(expenses, today=today, expense_type=expense_type)
    raise ValidationError(f"granularity must be one of: {', '.join(GRANULARITIES)}")
