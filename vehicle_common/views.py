"""Toolkit-independent state for the expense form, table and overview.

The desktop app renders these objects; they hold the UI flags, the loaded
list and the current selection, and dispatch user actions to
:class:`~vehicle_common.services.ExpenseService`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Mapping, Optional

from .aggregation import ChartPoint, OverviewSummary, chart_series, summarize
from .filtering import ExpenseFilter, filter_and_sort
from .models import Expense, ExpenseType
from .results import ActionResult
from .services import ExpenseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    title: str
    description: str
    destructive: bool = False


Notifier = Callable[[Notice], None]


def _error_notice(result: ActionResult, fallback: str) -> Notice:
    return Notice("Error", result.error or fallback, destructive=True)


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def default_form_values(today: Optional[date] = None) -> Dict[str, object]:
    return {
        "amount": "0.00",
        "type": ExpenseType.PARKING.value,
        "date": (today or date.today()).isoformat(),
        "description": "",
    }


class ExpenseFormController:
    """State behind the "Add Expense" dialog."""

    def __init__(self, service: ExpenseService, notify: Notifier) -> None:
        self.service = service
        self.notify = notify
        self.dialog_open = False
        self.submitting = False
        self.values: Dict[str, object] = default_form_values()

    def open(self) -> None:
        self.dialog_open = True

    def close(self) -> None:
        self.dialog_open = False

    def reset(self) -> None:
        self.values = default_form_values()

    def submit(self, values: Mapping[str, object]) -> bool:
        self.submitting = True
        self.values = dict(values)
        try:
            result = self.service.create(values)
            if result.success:
                self.notify(Notice("Expense added", "Your expense has been added successfully."))
                self.reset()
            else:
                self.notify(_error_notice(result, "Failed to add expense"))
            return result.success
        finally:
            self.submitting = False
            self.dialog_open = False


class ExpenseTableController:
    """Filtering, sorting, selection and row actions for the expense table."""

    def __init__(self, service: ExpenseService, notify: Notifier) -> None:
        self.service = service
        self.notify = notify
        self.expenses: List[Expense] = []
        self.criteria = ExpenseFilter()
        self.sort_direction = "desc"
        self.selected: List[str] = []
        self.delete_dialog_open = False
        self.filters_visible = False
        self.loading = False

    # Data -----------------------------------------------------------------
    def load(self) -> bool:
        self.loading = True
        try:
            result = self.service.list()
        finally:
            self.loading = False
        if not result.success:
            self.notify(_error_notice(result, "Failed to fetch expenses"))
            return False
        self.expenses = list(result.data or [])
        known = {expense.id for expense in self.expenses}
        self.selected = [expense_id for expense_id in self.selected if expense_id in known]
        return True

    def visible_rows(self) -> List[Expense]:
        return filter_and_sort(self.expenses, self.criteria, self.sort_direction)

    # Filters and sorting --------------------------------------------------
    def set_filter(self, criteria: ExpenseFilter) -> None:
        self.criteria = criteria

    def clear_filters(self) -> None:
        self.criteria = ExpenseFilter()

    def toggle_filters(self) -> None:
        self.filters_visible = not self.filters_visible

    def toggle_sort(self) -> str:
        self.sort_direction = "asc" if self.sort_direction == "desc" else "desc"
        return self.sort_direction

    # Selection ------------------------------------------------------------
    def is_selected(self, expense_id: str) -> bool:
        return expense_id in self.selected

    def toggle_row(self, expense_id: str) -> None:
        if expense_id in self.selected:
            self.selected.remove(expense_id)
        else:
            self.selected.append(expense_id)

    def toggle_select_all(self) -> None:
        visible_ids = [expense.id for expense in self.visible_rows()]
        if not visible_ids or set(visible_ids) <= set(self.selected):
            self.selected = []
        else:
            self.selected = visible_ids

    def set_selection(self, ids: List[str]) -> None:
        self.selected = list(dict.fromkeys(ids))

    def clear_selection(self) -> None:
        self.selected = []

    # Bulk actions ---------------------------------------------------------
    def request_bulk_delete(self) -> bool:
        if not self.selected:
            return False
        self.delete_dialog_open = True
        return True

    def cancel_bulk_delete(self) -> None:
        self.delete_dialog_open = False

    def confirm_bulk_delete(self) -> bool:
        count = len(self.selected)
        try:
            result = self.service.delete(list(self.selected))
            if result.success:
                self.notify(Notice("Success", f"{count} expense(s) deleted successfully"))
                self.load()
                self.clear_selection()
            else:
                self.notify(_error_notice(result, "Failed to delete expenses"))
            return result.success
        finally:
            self.delete_dialog_open = False

    def duplicate_selected(self) -> bool:
        count = len(self.selected)
        result = self.service.duplicate(list(self.selected))
        if not result.success:
            self.notify(_error_notice(result, "Failed to duplicate expenses"))
            return False
        self.notify(Notice("Success", f"{count} expense(s) duplicated successfully"))
        self.load()
        self.clear_selection()
        return True

    # Row actions ----------------------------------------------------------
    def delete_single(self, expense_id: str) -> bool:
        result = self.service.delete([expense_id])
        if not result.success:
            self.notify(_error_notice(result, "Failed to delete expense"))
            return False
        self.notify(Notice("Success", "Expense deleted successfully"))
        self.load()
        return True

    def duplicate_single(self, expense_id: str) -> bool:
        result = self.service.duplicate([expense_id])
        if not result.success:
            self.notify(_error_notice(result, "Failed to duplicate expense"))
            return False
        self.notify(Notice("Success", "Expense duplicated successfully"))
        self.load()
        return True

    def edit_single(self, expense_id: str) -> None:
        """Placeholder for the row "Edit" entry; records are never edited in place."""
        logger.debug("Edit requested for expense %s; editing is not supported", expense_id)

    def delete_prompt(self) -> str:
        count = len(self.selected)
        return (
            f"You are about to delete {count} expense{_plural(count)}. "
            "This action cannot be undone."
        )


class OverviewController:
    """Keeps the last loaded list and derives totals and chart series from it."""

    def __init__(self, service: ExpenseService, notify: Notifier) -> None:
        self.service = service
        self.notify = notify
        self.expenses: List[Expense] = []
        self.granularity = "month"
        self.expense_type: Optional[str] = None

    def load(self) -> bool:
        result = self.service.list()
        if not result.success:
            self.notify(_error_notice(result, "Failed to fetch expenses"))
            return False
        self.expenses = list(result.data or [])
        return True

    def summary(self) -> OverviewSummary:
        return summarize(self.expenses)

    def series(self, today: Optional[date] = None) -> List[ChartPoint]:
        return chart_series(
            self.expenses,
            granularity=self.granularity,
            today=today,
            expense_type=self.expense_type,
        )

    def toggle_granularity(self) -> str:
        self.granularity = "day" if self.granularity == "month" else "month"
        return self.granularity
