"""In-memory filtering and date sorting for expense tables."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Mapping, Optional

from .exceptions import ValidationError
from .models import Expense, ExpenseType
from .validators import (
    parse_optional_number,
    validate_expense_type,
    validate_optional_date,
)

SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class ExpenseFilter:
    """Criteria for the expense table; every set field must match."""

    search: str = ""
    expense_type: Optional[ExpenseType] = None
    start: Optional[date] = None
    end: Optional[date] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return self == ExpenseFilter()

    def matches(self, expense: Expense) -> bool:
        if self.expense_type is not None and expense.type is not self.expense_type:
            return False
        if self.search:
            needle = self.search.lower()
            haystacks = ((expense.description or "").lower(), expense.type.value)
            if not any(needle in text for text in haystacks):
                return False
        if self.start is not None and expense.date < self.start:
            return False
        if self.end is not None and expense.date > self.end:
            return False
        if self.min_amount is not None and expense.amount < self.min_amount:
            return False
        if self.max_amount is not None and expense.amount > self.max_amount:
            return False
        return True

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "ExpenseFilter":
        """Build a filter from loosely typed query/CLI values."""
        search = raw.get("search")
        if search is not None and not isinstance(search, str):
            raise ValidationError("search must be a string")
        type_value = raw.get("type")
        expense_type = None
        if type_value not in (None, "", "all"):
            expense_type = validate_expense_type(type_value, "type")
        return cls(
            search=(search or "").strip(),
            expense_type=expense_type,
            start=validate_optional_date(raw.get("start"), "start"),
            end=validate_optional_date(raw.get("end"), "end"),
            min_amount=parse_optional_number(raw.get("min_amount"), "min_amount"),
            max_amount=parse_optional_number(raw.get("max_amount"), "max_amount"),
        )


def validate_sort_direction(value: object) -> str:
    if value not in SORT_DIRECTIONS:
        raise ValidationError(f"sort must be one of: {', '.join(SORT_DIRECTIONS)}")
    return str(value)


def apply_filters(expenses: Iterable[Expense], criteria: ExpenseFilter) -> List[Expense]:
    return [expense for expense in expenses if criteria.matches(expense)]


def sort_by_date(expenses: Iterable[Expense], direction: str = "desc") -> List[Expense]:
    direction = validate_sort_direction(direction)
    # sorted() is stable, so equal dates keep their incoming order.
    return sorted(expenses, key=lambda expense: expense.date, reverse=direction == "desc")


def filter_and_sort(
    expenses: Iterable[Expense], criteria: ExpenseFilter, direction: str = "desc"
) -> List[Expense]:
    return sort_by_date(apply_filters(expenses, criteria), direction)
