"""Console interface for the vehicle expense tracker."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from vehicle_common.aggregation import GRANULARITIES, chart_series, summarize
from vehicle_common.config import Settings, load_settings
from vehicle_common.exceptions import PersistenceError, ValidationError
from vehicle_common.filtering import SORT_DIRECTIONS, ExpenseFilter, filter_and_sort
from vehicle_common.logging_config import configure_logging
from vehicle_common.models import Expense, ExpenseType
from vehicle_common.services import ExpenseService
from vehicle_common.storage import Database


def _parse_date(value: str) -> str:
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc
    return value


def _parse_amount(value: str) -> str:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc
    if not amount.is_finite() or amount <= 0:
        raise argparse.ArgumentTypeError("Amount must be greater than zero")
    return value


def _load_service(settings: Settings) -> ExpenseService:
    database = Database(settings.database_url, echo=settings.sql_echo)
    database.create_all()
    return ExpenseService(database)


def _format_expense(expense: Expense) -> str:
    return (
        f"[{expense.id}] {expense.date.isoformat()} {expense.type.label}: {expense.amount:.2f}\n"
        f"  Description: {expense.description or '-'}\n"
    )


def handle_add(args: argparse.Namespace, service: ExpenseService) -> bool:
    result = service.create(
        {
            "amount": args.amount,
            "type": args.type,
            "date": args.date or date.today().isoformat(),
            "description": args.description,
        }
    )
    if not result.success:
        print(result.error, file=sys.stderr)
        return False
    print("Expense added:\n" + _format_expense(result.data))
    return True


def handle_list(args: argparse.Namespace, service: ExpenseService) -> bool:
    result = service.list()
    if not result.success:
        print(result.error, file=sys.stderr)
        return False
    criteria = ExpenseFilter.from_mapping(
        {
            "search": args.search,
            "type": args.type,
            "start": args.start,
            "end": args.end,
            "min_amount": args.min_amount,
            "max_amount": args.max_amount,
        }
    )
    expenses = filter_and_sort(result.data, criteria, args.sort)
    if not expenses:
        print("No expenses found.")
        return True
    total = sum(expense.amount for expense in expenses)
    print(f"Found {len(expenses)} expenses (total {total:.2f}):")
    for expense in expenses:
        print(_format_expense(expense))
    return True


def handle_delete(args: argparse.Namespace, service: ExpenseService) -> bool:
    result = service.delete(args.ids)
    if not result.success:
        print(result.error, file=sys.stderr)
        return False
    print(f"Deleted {result.data} expense(s).")
    return True


def handle_duplicate(args: argparse.Namespace, service: ExpenseService) -> bool:
    result = service.duplicate(args.ids)
    if not result.success:
        print(result.error, file=sys.stderr)
        return False
    print(f"Duplicated {len(result.data)} expense(s):")
    for expense in result.data:
        print(_format_expense(expense))
    return True


def handle_overview(args: argparse.Namespace, service: ExpenseService) -> bool:
    result = service.list()
    if not result.success:
        print(result.error, file=sys.stderr)
        return False
    summary = summarize(result.data)
    print(f"Total expenses: {summary.total:.2f}")
    for member in ExpenseType:
        amount = summary.by_type[member.value]
        share = summary.shares[member.value]
        print(f"  {member.label:<18} {amount:>10.2f}  ({share:.1f}%)")
    heading = "Monthly totals" if args.granularity == "month" else "Daily totals"
    print(f"{heading}:")
    for point in chart_series(result.data, granularity=args.granularity, expense_type=args.type):
        print(f"  {point.name:>3} {point.amount:>10.2f}")
    return True


HANDLERS = {
    "add": handle_add,
    "list": handle_list,
    "delete": handle_delete,
    "duplicate": handle_duplicate,
    "overview": handle_overview,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Vehicle Expense Tracker CLI")
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy database URL (default: $DATABASE_URL or sqlite:///vehicle_expenses.db)",
    )
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    types = list(ExpenseType.values())

    add = subparsers.add_parser("add", help="Record a new expense")
    add.add_argument("amount", type=_parse_amount)
    add.add_argument("type", choices=types)
    add.add_argument("date", nargs="?", type=_parse_date, help="YYYY-MM-DD (default: today)")
    add.add_argument("--description")

    list_parser = subparsers.add_parser("list", help="List expenses")
    list_parser.add_argument("--search")
    list_parser.add_argument("--type", choices=types)
    list_parser.add_argument("--start", type=_parse_date)
    list_parser.add_argument("--end", type=_parse_date)
    list_parser.add_argument("--min-amount")
    list_parser.add_argument("--max-amount")
    list_parser.add_argument("--sort", choices=SORT_DIRECTIONS, default="desc")

    delete = subparsers.add_parser("delete", help="Delete expenses by id")
    delete.add_argument("ids", nargs="+")

    duplicate = subparsers.add_parser("duplicate", help="Duplicate expenses by id")
    duplicate.add_argument("ids", nargs="+")

    overview = subparsers.add_parser("overview", help="Show totals and chart data")
    overview.add_argument("--granularity", choices=GRANULARITIES, default="month")
    overview.add_argument("--type", choices=types)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.database_url)
    configure_logging(args.log_level or "WARNING")

    try:
        service = _load_service(settings)
        succeeded = HANDLERS[args.command](args, service)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0 if succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
