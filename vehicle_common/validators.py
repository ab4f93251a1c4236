"""Validation helpers shared across vehicle expense services."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional

from .exceptions import ValidationError
from .models import ExpenseType, parse_datetime

DESCRIPTION_MAX_LENGTH = 500


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_amount(raw: object, field: str = "amount") -> Decimal:
    """Convert raw input to a positive Decimal with exactly two fraction digits."""
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:  # type: ignore[arg-type]
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")

    quantized = _quantize_two_decimals(amount)
    if quantized <= 0:
        raise ValidationError(f"{field} must be at least 0.01")
    return quantized


def parse_optional_number(raw: object, field: str) -> Optional[float]:
    """Parse an optional range bound; blanks mean "no bound"."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, TypeError) as exc:  # type: ignore[arg-type]
        raise ValidationError(f"{field} must be a numeric value") from exc
    if not value.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return float(value)


def validate_expense_type(value: object, field: str = "type") -> ExpenseType:
    if isinstance(value, ExpenseType):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    canonical = value.strip().lower()
    try:
        return ExpenseType(canonical)
    except ValueError as exc:
        raise ValidationError(
            f"{field} must be one of: {', '.join(ExpenseType.values())}"
        ) from exc


def validate_date(value: object, field: str = "date") -> date:
    """Coerce dates, datetimes and ISO 8601 strings to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a date or ISO 8601 string")
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parse_datetime(text).date()
    except ValueError as exc:
        raise ValidationError(f"{field} must be a valid ISO 8601 date") from exc


def validate_optional_date(value: object, field: str) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return validate_date(value, field)


def validate_optional_str(value: object, field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        return None
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def normalize_ids(raw_ids: Optional[Iterable[object]], field: str = "ids") -> List[str]:
    """Return unique, non-empty string ids preserving the given order."""
    if raw_ids is None:
        return []
    if isinstance(raw_ids, (str, bytes)):
        raise ValidationError(f"{field} must be a list of identifiers")
    normalized: List[str] = []
    seen = set()
    for raw in raw_ids:
        if not isinstance(raw, str):
            raise ValidationError(f"{field} must contain strings")
        identifier = raw.strip()
        if not identifier or identifier in seen:
            continue
        seen.add(identifier)
        normalized.append(identifier)
    return normalized
