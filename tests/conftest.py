from __future__ import annotations

from typing import Optional

import pytest

from vehicle_common.models import Expense
from vehicle_common.services import ExpenseService
from vehicle_common.storage import Database


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def service(database):
    return ExpenseService(database)


@pytest.fixture
def add_expense(service):
    """Create an expense through the service and return it."""

    def _add(
        amount: object = "10.00",
        type: str = "parking",
        on: object = "2024-01-15",
        description: Optional[str] = None,
    ) -> Expense:
        result = service.create(
            {"amount": amount, "type": type, "date": on, "description": description}
        )
        assert result.success, result.error
        return result.data

    return _add
