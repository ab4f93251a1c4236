from __future__ import annotations

from contextlib import contextmanager
from datetime import date

from vehicle_common.exceptions import PersistenceError
from vehicle_common.models import ExpenseType
from vehicle_common.services import ExpenseService, copy_description
from vehicle_common.storage import Database
from vehicle_common.validators import DESCRIPTION_MAX_LENGTH


def test_create_returns_plain_values(service):
    result = service.create(
        {"amount": "12.345", "type": "Gasoline", "date": "2024-03-05T10:00:00Z", "description": "  Shell  "}
    )

    assert result.success
    expense = result.data
    assert expense.amount == 12.35
    assert isinstance(expense.amount, float)
    assert expense.type is ExpenseType.GASOLINE
    assert expense.date == date(2024, 3, 5)
    assert expense.description == "Shell"
    assert expense.created_at.tzinfo is not None


def test_create_stores_blank_description_as_none(service):
    result = service.create({"amount": 5, "type": "toll", "date": date(2024, 2, 1), "description": "   "})

    assert result.success
    assert result.data.description is None


def test_create_rejects_non_positive_amount(service):
    for amount in (0, "-5", "0.001"):
        result = service.create({"amount": amount, "type": "parking", "date": "2024-01-01"})
        assert not result.success
        assert result.error == "Failed to create expense"
        assert result.data is None

    assert service.list().data == []


def test_create_rejects_unknown_type(service):
    result = service.create({"amount": "10", "type": "fuel", "date": "2024-01-01"})

    assert not result.success
    assert result.error == "Failed to create expense"
    assert service.list().data == []


def test_create_rejects_missing_date(service):
    result = service.create({"amount": "10", "type": "parking"})

    assert not result.success


def test_list_is_sorted_by_date_descending(service, add_expense):
    add_expense(on="2024-01-10")
    add_expense(on="2024-03-01")
    add_expense(on="2023-12-31")
    add_expense(on="2024-02-14")

    result = service.list()

    assert result.success
    dates = [expense.date for expense in result.data]
    assert dates == sorted(dates, reverse=True)
    assert dates[0] == date(2024, 3, 1)


def test_list_failure_is_reported_generically():
    database = Database("sqlite://")
    broken = ExpenseService(database)

    result = broken.list()

    assert not result.success
    assert result.error == "Failed to fetch expenses"


def test_delete_removes_exactly_the_given_ids(service, add_expense):
    keep = add_expense(description="keep")
    doomed = [add_expense(description=f"drop {index}") for index in range(3)]

    result = service.delete([expense.id for expense in doomed])

    assert result.success
    assert result.data == 3
    remaining = [expense.id for expense in service.list().data]
    assert remaining == [keep.id]


def test_delete_ignores_missing_ids(service, add_expense):
    existing = add_expense()

    result = service.delete([existing.id, "does-not-exist"])

    assert result.success
    assert result.data == 1
    assert service.list().data == []


def test_delete_with_no_ids_is_a_no_op(service, add_expense):
    add_expense()

    result = service.delete([])

    assert result.success
    assert result.data == 0
    assert len(service.list().data) == 1


def test_duplicate_appends_copy_suffix(service, add_expense):
    original = add_expense(amount="42.50", type="parking", on="2024-05-04", description="Parking at mall")

    result = service.duplicate([original.id])

    assert result.success
    [copy] = result.data
    assert copy.id != original.id
    assert copy.description == "Parking at mall (Copy)"
    assert (copy.amount, copy.type, copy.date) == (original.amount, original.type, original.date)
    assert len(service.list().data) == 2


def test_duplicate_without_description_uses_bare_suffix(service, add_expense):
    original = add_expense(description=None)

    result = service.duplicate([original.id])

    assert result.data[0].description == "(Copy)"


def test_duplicate_many_ignores_unknown_ids(service, add_expense):
    first = add_expense(description="a")
    second = add_expense(description="b")

    result = service.duplicate([first.id, second.id, "missing"])

    assert result.success
    assert sorted(expense.description for expense in result.data) == ["a (Copy)", "b (Copy)"]
    assert len(service.list().data) == 4


def test_duplicate_keeps_copies_made_before_a_failure(database, service, add_expense, monkeypatch):
    add_expense(description="a")
    add_expense(description="b")
    ids = [expense.id for expense in service.list().data]
    original_scope = database.session_scope
    calls = {"count": 0}

    @contextmanager
    def flaky_scope():
        calls["count"] += 1
        # 1: read sources, 2: first copy, 3: second copy
        if calls["count"] == 3:
            raise PersistenceError("disk full")
        with original_scope() as session:
            yield session

    monkeypatch.setattr(database, "session_scope", flaky_scope)
    result = service.duplicate(ids)
    monkeypatch.undo()

    assert not result.success
    assert result.error == "Failed to duplicate expenses"
    descriptions = sorted(expense.description for expense in service.list().data)
    assert len(descriptions) == 3
    assert sum(1 for text in descriptions if text.endswith("(Copy)")) == 1


def test_listeners_are_notified_after_mutations(service, add_expense):
    calls = []
    unsubscribe = service.subscribe(lambda: calls.append("changed"))

    expense = add_expense()
    service.duplicate([expense.id])
    service.delete([expense.id])
    service.create({"amount": -1, "type": "parking", "date": "2024-01-01"})
    service.list()

    assert calls == ["changed", "changed", "changed"]

    unsubscribe()
    add_expense()
    assert len(calls) == 3


def test_copy_description():
    assert copy_description("Oil change") == "Oil change (Copy)"
    assert copy_description("") == "(Copy)"
    assert copy_description(None) == "(Copy)"


def test_create_rejects_decimal_comma(service):
    result = service.create({"amount": "1,5", "type": "toll", "date": "2024-01-01"})

    assert not result.success
    assert service.list().data == []


def test_duplicate_keeps_description_within_limit(service, add_expense):
    original = add_expense(description="x" * DESCRIPTION_MAX_LENGTH)

    [copy] = service.duplicate([original.id]).data

    assert len(copy.description) == DESCRIPTION_MAX_LENGTH
    assert copy.description.endswith(" (Copy)")
    assert copy.description.startswith("x" * 490)


def test_copy_description_short_text_is_untouched():
    text = "y" * (DESCRIPTION_MAX_LENGTH - len(" (Copy)"))

    assert copy_description(text) == f"{text} (Copy)"
