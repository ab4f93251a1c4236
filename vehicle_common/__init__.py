"""Core business logic package for the vehicle expense tracker."""

from .aggregation import ChartPoint, OverviewSummary, chart_series, summarize, totals_by_type
from .config import Settings, load_settings
from .exceptions import PersistenceError, ValidationError
from .filtering import ExpenseFilter, filter_and_sort
from .models import Expense, ExpenseType
from .results import ActionResult
from .services import ExpenseService
from .storage import Database

__all__ = [
    "ActionResult",
    "ChartPoint",
    "Database",
    "Expense",
    "ExpenseFilter",
    "ExpenseService",
    "ExpenseType",
    "OverviewSummary",
    "PersistenceError",
    "Settings",
    "ValidationError",
    "chart_series",
    "filter_and_sort",
    "load_settings",
    "summarize",
    "totals_by_type",
]
