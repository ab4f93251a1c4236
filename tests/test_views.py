from __future__ import annotations

from datetime import date

import pytest

from vehicle_common.filtering import ExpenseFilter
from vehicle_common.models import ExpenseType
from vehicle_common.results import ActionResult
from vehicle_common.views import (
    ExpenseFormController,
    ExpenseTableController,
    Notice,
    OverviewController,
    default_form_values,
)


@pytest.fixture
def notices():
    return []


@pytest.fixture
def table(service, notices):
    return ExpenseTableController(service, notices.append)


def test_default_form_values():
    assert default_form_values(date(2024, 5, 6)) == {
        "amount": "0.00",
        "type": "parking",
        "date": "2024-05-06",
        "description": "",
    }


def test_form_submit_success_resets_and_closes(service, notices):
    form = ExpenseFormController(service, notices.append)
    form.open()

    ok = form.submit({"amount": "18", "type": "toll", "date": "2024-04-01", "description": "Bridge"})

    assert ok
    assert not form.dialog_open
    assert not form.submitting
    assert form.values == default_form_values()
    assert notices == [Notice("Expense added", "Your expense has been added successfully.")]
    assert len(service.list().data) == 1


def test_form_submit_failure_reports_and_keeps_values(service, notices):
    form = ExpenseFormController(service, notices.append)
    form.open()
    values = {"amount": "-3", "type": "parking", "date": "2024-04-01", "description": ""}

    ok = form.submit(values)

    assert not ok
    assert not form.dialog_open
    assert form.values == values
    assert notices == [Notice("Error", "Failed to create expense", destructive=True)]


def test_table_load_and_default_sort(table, add_expense):
    add_expense(on="2024-01-01")
    add_expense(on="2024-03-01")

    assert table.load()

    assert table.sort_direction == "desc"
    assert [row.date for row in table.visible_rows()] == [date(2024, 3, 1), date(2024, 1, 1)]
    table.toggle_sort()
    assert [row.date for row in table.visible_rows()] == [date(2024, 1, 1), date(2024, 3, 1)]


def test_table_filtering_applies_to_visible_rows(table, add_expense):
    add_expense(amount=12, type="gasoline")
    add_expense(amount=60, type="gasoline")
    add_expense(amount=20, type="parking")
    table.load()

    table.set_filter(ExpenseFilter(expense_type=ExpenseType.GASOLINE, min_amount=10, max_amount=50))

    assert [row.amount for row in table.visible_rows()] == [12]
    table.clear_filters()
    assert len(table.visible_rows()) == 3


def test_toggle_select_all_follows_visible_rows(table, add_expense):
    gas = add_expense(type="gasoline")
    add_expense(type="parking")
    table.load()
    table.set_filter(ExpenseFilter(expense_type=ExpenseType.GASOLINE))

    table.toggle_select_all()
    assert table.selected == [gas.id]

    table.toggle_select_all()
    assert table.selected == []


def test_toggle_row(table, add_expense):
    expense = add_expense()
    table.load()

    table.toggle_row(expense.id)
    assert table.is_selected(expense.id)
    table.toggle_row(expense.id)
    assert not table.is_selected(expense.id)


def test_bulk_delete_requires_confirmation(table, service, add_expense, notices):
    first = add_expense()
    second = add_expense()
    add_expense()
    table.load()

    assert not table.request_bulk_delete()

    table.set_selection([first.id, second.id])
    assert table.request_bulk_delete()
    assert table.delete_dialog_open
    assert table.delete_prompt() == "You are about to delete 2 expenses. This action cannot be undone."

    table.cancel_bulk_delete()
    assert not table.delete_dialog_open
    assert len(service.list().data) == 3

    table.request_bulk_delete()
    assert table.confirm_bulk_delete()
    assert not table.delete_dialog_open
    assert table.selected == []
    assert len(table.expenses) == 1
    assert notices[-1] == Notice("Success", "2 expense(s) deleted successfully")


def test_duplicate_selected_reloads_and_clears_selection(table, add_expense, notices):
    expense = add_expense(description="Parking at mall")
    table.load()
    table.toggle_row(expense.id)

    assert table.duplicate_selected()

    assert table.selected == []
    assert sorted(row.description for row in table.expenses) == [
        "Parking at mall",
        "Parking at mall (Copy)",
    ]
    assert notices[-1].title == "Success"


def test_single_row_actions(table, add_expense, notices):
    expense = add_expense()
    table.load()

    assert table.duplicate_single(expense.id)
    assert len(table.expenses) == 2
    assert table.delete_single(expense.id)
    assert [row.description for row in table.expenses] == ["(Copy)"]
    assert [notice.description for notice in notices] == [
        "Expense duplicated successfully",
        "Expense deleted successfully",
    ]


def test_failed_action_leaves_state_untouched(table, service, add_expense, notices, monkeypatch):
    expense = add_expense()
    table.load()
    table.toggle_row(expense.id)
    before = list(table.expenses)

    monkeypatch.setattr(service, "delete", lambda ids: ActionResult.fail("Failed to delete expenses"))
    table.request_bulk_delete()

    assert not table.confirm_bulk_delete()
    assert table.expenses == before
    assert table.selected == [expense.id]
    assert not table.delete_dialog_open
    assert notices == [Notice("Error", "Failed to delete expenses", destructive=True)]


def test_failed_load_keeps_previous_rows(table, service, add_expense, notices, monkeypatch):
    add_expense()
    table.load()
    monkeypatch.setattr(service, "list", lambda: ActionResult.fail("Failed to fetch expenses"))

    assert not table.load()
    assert len(table.expenses) == 1
    assert notices[-1].destructive


def test_edit_is_a_no_op(table, service, add_expense):
    expense = add_expense()
    table.load()

    assert table.edit_single(expense.id) is None
    assert service.list().data == [expense]


def test_overview_controller(service, add_expense, notices):
    add_expense(amount=20, type="parking", on=date.today())
    add_expense(amount=5, type="parking", on=date.today())
    add_expense(amount=30, type="gasoline", on=date.today())
    overview = OverviewController(service, notices.append)

    assert overview.load()

    summary = overview.summary()
    assert summary.by_type["parking"] == 25
    assert summary.by_type["gasoline"] == 30
    assert summary.total == 55
    assert sum(point.amount for point in overview.series()) == 55

    overview.expense_type = "gasoline"
    assert overview.toggle_granularity() == "day"
    assert sum(point.amount for point in overview.series()) == 30
    assert notices == []


def test_select_all_after_filtering_selects_the_visible_rows(table, add_expense):
    parking = add_expense(type="parking")
    toll = add_expense(type="toll")
    table.load()
    table.toggle_row(parking.id)

    table.set_filter(ExpenseFilter(search="toll"))
    table.toggle_select_all()

    assert table.selected == [toll.id]

    table.toggle_select_all()
    assert table.selected == []


def test_select_all_with_nothing_visible_clears_selection(table, add_expense):
    expense = add_expense(type="parking")
    table.load()
    table.toggle_row(expense.id)

    table.set_filter(ExpenseFilter(search="no such text"))
    table.toggle_select_all()

    assert table.selected == []
