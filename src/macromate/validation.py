"""Shared input validation and rounding helpers."""

import math
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from macromate.domain.errors import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
BARCODE_PATTERN = re.compile(r"^\d{6,14}$")
MAX_PAST_DAYS = 30


def round_half_up(value: float, places: int) -> float:
    """Round to a number of decimal places, halves away from zero."""
    quantum = Decimal(1).scaleb(-places)
    try:
        rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return float(value)
    return float(rounded)


def parse_log_date(raw: str) -> date:
    """Parse a YYYY-MM-DD path segment into a date."""
    if not DATE_PATTERN.match(raw):
        raise ValidationError(
            "Date must be in YYYY-MM-DD format", error="Invalid date format"
        )
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError(
            "Date must be in YYYY-MM-DD format", error="Invalid date format"
        ) from exc


def parse_days(raw: str | int | None, default: int = 3) -> int:
    """Parse the number of past days to summarize, bounded to 1..30."""
    if raw is None or raw == "":
        return default
    try:
        days = int(raw)
    except (TypeError, ValueError) as exc:
        raise _days_error() from exc
    validate_days(days)
    return days


def validate_days(days: int) -> None:
    """Reject day ranges outside 1..30."""
    if days < 1 or days > MAX_PAST_DAYS:
        raise _days_error()


def coerce_float(value: object, field: str) -> float:
    """Convert a client-supplied number (or numeric string) to float."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    return number


def coerce_grams(value: object, field: str) -> float:
    """Convert a client-supplied gram amount, which may not be negative."""
    grams = coerce_float(value, field)
    if grams < 0:
        raise ValidationError(f"{field} must not be negative")
    return grams


def _days_error() -> ValidationError:
    return ValidationError(
        f"Please choose a number between 1 and {MAX_PAST_DAYS} days.",
        error="Invalid days parameter",
    )
