from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from vehicle_common.exceptions import ValidationError
from vehicle_common.models import ExpenseType
from vehicle_common.validators import (
    normalize_ids,
    parse_amount,
    parse_optional_number,
    validate_date,
    validate_expense_type,
    validate_optional_str,
)


@pytest.mark.parametrize(
    "raw, expected",
    [("10", Decimal("10.00")), (7.005, Decimal("7.01")), (3, Decimal("3.00"))],
)
def test_parse_amount_coerces_to_two_decimals(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", [0, -1, "-0.5", "abc", None, "", "NaN", "Infinity", True, "1,5", "1,250.50"])
def test_parse_amount_rejects_invalid_values(raw):
    with pytest.raises(ValidationError):
        parse_amount(raw)


def test_validate_expense_type_is_case_insensitive():
    assert validate_expense_type(" Toll ") is ExpenseType.TOLL
    assert validate_expense_type(ExpenseType.PARKING) is ExpenseType.PARKING


@pytest.mark.parametrize("raw", ["fuel", "", None, 3])
def test_validate_expense_type_rejects_values_outside_the_enum(raw):
    with pytest.raises(ValidationError):
        validate_expense_type(raw)


def test_validate_date_accepts_dates_datetimes_and_strings():
    assert validate_date(date(2024, 1, 2)) == date(2024, 1, 2)
    assert validate_date(datetime(2024, 1, 2, 23, 0, tzinfo=timezone.utc)) == date(2024, 1, 2)
    assert validate_date("2024-01-02") == date(2024, 1, 2)
    assert validate_date("2024-01-02T08:30:00Z") == date(2024, 1, 2)


@pytest.mark.parametrize("raw", ["02/01/2024", "", None, 20240102])
def test_validate_date_rejects_garbage(raw):
    with pytest.raises(ValidationError):
        validate_date(raw)


def test_validate_optional_str():
    assert validate_optional_str(None, "description", 10) is None
    assert validate_optional_str("  ", "description", 10) is None
    assert validate_optional_str(" hi ", "description", 10) == "hi"
    with pytest.raises(ValidationError):
        validate_optional_str("x" * 11, "description", 10)
    with pytest.raises(ValidationError):
        validate_optional_str(5, "description", 10)


def test_parse_optional_number():
    assert parse_optional_number(None, "min_amount") is None
    assert parse_optional_number(" ", "min_amount") is None
    assert parse_optional_number("10.5", "min_amount") == 10.5
    with pytest.raises(ValidationError):
        parse_optional_number("ten", "min_amount")


def test_normalize_ids_drops_blanks_and_duplicates():
    assert normalize_ids(["a", " b ", "", "a"]) == ["a", "b"]
    assert normalize_ids(None) == []
    with pytest.raises(ValidationError):
        normalize_ids("abc")
    with pytest.raises(ValidationError):
        normalize_ids([1, 2])
