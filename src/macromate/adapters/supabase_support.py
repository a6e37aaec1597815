"""Shared helpers for Supabase repositories."""

from datetime import date, datetime
from typing import Any

from postgrest.exceptions import APIError

from macromate.domain.errors import ConflictError, StoreError

UNIQUE_VIOLATION = "23505"


def execute(
    query: Any, action: str, conflict: ConflictError | None = None
) -> list[dict[str, Any]]:
    """Execute a query builder and return its rows, mapping store errors.

    A unique-constraint violation raises ``conflict`` when one is given.
    """
    try:
        response = query.execute()
    except APIError as exc:
        if conflict is not None and exc.code == UNIQUE_VIOLATION:
            raise conflict from exc
        raise StoreError(f"Failed to {action}: {exc.message}") from exc
    return list(response.data or [])


def parse_datetime(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, if present."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_date(raw: object) -> date:
    """Parse a YYYY-MM-DD date column."""
    return date.fromisoformat(str(raw)[:10])


def as_float(raw: object) -> float:
    """Convert a numeric column to float, treating null as zero."""
    return float(raw or 0)  # type: ignore[arg-type]
