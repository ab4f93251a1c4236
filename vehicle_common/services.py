"""Framework-agnostic business services for the vehicle expense tracker."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import delete, select

from .models import Expense
from .results import ActionResult
from .storage import Database, ExpenseRecord
from .validators import (
    DESCRIPTION_MAX_LENGTH,
    normalize_ids,
    parse_amount,
    validate_date,
    validate_expense_type,
    validate_optional_str,
)

logger = logging.getLogger(__name__)

COPY_SUFFIX = "(Copy)"

Listener = Callable[[], None]


def copy_description(description: Optional[str]) -> str:
    """Description given to a duplicated expense.

    The original text is shortened when needed so the result never exceeds
    ``DESCRIPTION_MAX_LENGTH``.
    """
    if not description:
        return COPY_SUFFIX
    room = DESCRIPTION_MAX_LENGTH - len(COPY_SUFFIX) - 1
    return f"{description[:room].rstrip()} {COPY_SUFFIX}"


class ExpenseService:
    """Translates the expense operations into database calls.

    Every public operation returns an :class:`ActionResult`. Failures of any
    kind are logged and reported with a generic message; callers never see the
    underlying exception.
    """

    def __init__(self, database: Database) -> None:
        self._db = database
        self._listeners: List[Listener] = []

    # Public API -----------------------------------------------------------
    def create(self, payload: Mapping[str, object]) -> ActionResult[Expense]:
        try:
            data = self._validate_payload(payload)
            with self._db.session_scope() as session:
                record = ExpenseRecord(**data)
                session.add(record)
                session.flush()
                expense = record.to_expense()
        except Exception:
            logger.exception("Failed to create expense")
            return ActionResult.fail("Failed to create expense")

        logger.info("Created %s expense %s (%.2f)", expense.type.value, expense.id, expense.amount)
        self._revalidate()
        return ActionResult.ok(expense)

    def list(self) -> ActionResult[List[Expense]]:
        try:
            with self._db.session_scope() as session:
                records = session.scalars(
                    select(ExpenseRecord).order_by(
                        ExpenseRecord.date.desc(), ExpenseRecord.created_at.desc()
                    )
                ).all()
                expenses = [record.to_expense() for record in records]
        except Exception:
            logger.exception("Failed to fetch expenses")
            return ActionResult.fail("Failed to fetch expenses")
        return ActionResult.ok(expenses)

    def delete(self, ids: Iterable[str]) -> ActionResult[int]:
        try:
            identifiers = normalize_ids(ids)
            removed = 0
            if identifiers:
                with self._db.session_scope() as session:
                    outcome = session.execute(
                        delete(ExpenseRecord).where(ExpenseRecord.id.in_(identifiers))
                    )
                    removed = outcome.rowcount or 0
        except Exception:
            logger.exception("Failed to delete expenses")
            return ActionResult.fail("Failed to delete expenses")

        logger.info("Deleted %d of %d requested expenses", removed, len(identifiers))
        self._revalidate()
        return ActionResult.ok(removed)

    def duplicate(self, ids: Iterable[str]) -> ActionResult[List[Expense]]:
        created: List[Expense] = []
        try:
            identifiers = normalize_ids(ids)
            sources: List[Dict[str, object]] = []
            if identifiers:
                with self._db.session_scope() as session:
                    records = session.scalars(
                        select(ExpenseRecord).where(ExpenseRecord.id.in_(identifiers))
                    ).all()
                    sources = [
                        {
                            "amount": record.amount,
                            "type": record.type,
                            "date": record.date,
                            "description": copy_description(record.description),
                        }
                        for record in records
                    ]
            # Each copy commits on its own; earlier copies survive a later failure.
            for source in sources:
                with self._db.session_scope() as session:
                    record = ExpenseRecord(**source)
                    session.add(record)
                    session.flush()
                    created.append(record.to_expense())
        except Exception:
            logger.exception("Failed to duplicate expenses (%d copies committed)", len(created))
            if created:
                self._revalidate()
            return ActionResult.fail("Failed to duplicate expenses")

        logger.info("Duplicated %d expenses", len(created))
        self._revalidate()
        return ActionResult.ok(created)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every successful mutation.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Internal helpers -----------------------------------------------------
    def _revalidate(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:  # pragma: no cover - defensive guard
                logger.exception("Expense change listener %r failed", listener)

    @staticmethod
    def _validate_payload(payload: Mapping[str, object]) -> Dict[str, object]:
        return {
            "amount": parse_amount(payload.get("amount"), "amount"),
            "type": validate_expense_type(payload.get("type"), "type"),
            "date": validate_date(payload.get("date"), "date"),
            "description": validate_optional_str(
                payload.get("description"), "description", DESCRIPTION_MAX_LENGTH
            ),
        }
