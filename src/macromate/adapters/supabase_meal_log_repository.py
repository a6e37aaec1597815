"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from macromate.adapters.supabase_support import (
    as_float,
    execute,
    parse_date,
    parse_datetime,
)
from macromate.domain.errors import NotFoundError, StoreError
from macromate.domain.macros import MacroRecord, MealLogEntry
from macromate.services.meals import MealLogRepository
from macromate.validation import round_half_up

_TABLE = "macro_logs"


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def create_log(  # noqa: PLR0913
        self,
        user_id: str,
        log_date: date,
        meal_time: datetime,
        food_item: str,
        macros: MacroRecord,
    ) -> MealLogEntry:
        """Create a meal log row and return it."""
        rows = execute(
            self.client.table(_TABLE).insert(
                {
                    "user_id": str(user_id),
                    "log_date": log_date.isoformat(),
                    "meal_time": meal_time.isoformat(),
                    "food_item": food_item,
                    "protein_g": round_half_up(macros.protein_g, 1),
                    "carbs_g": round_half_up(macros.carbs_g, 1),
                    "fats_g": round_half_up(macros.fats_g, 1),
                    "calories": round_half_up(macros.calories, 1),
                }
            ),
            "save macro data",
        )
        if not rows:
            raise StoreError("Failed to save macro data")
        return _parse_log(rows[0])

    def list_logs_for_date(self, user_id: str, log_date: date) -> list[MealLogEntry]:
        """Return a user's logs for a date, ordered by meal time."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("log_date", log_date.isoformat())
            .order("meal_time", desc=False),
            "retrieve daily macros",
        )
        return [_parse_log(row) for row in rows]

    def list_logs_in_range(
        self, user_id: str, start: date, end: date
    ) -> list[MealLogEntry]:
        """Return a user's logs with start <= log_date < end."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("log_date", start.isoformat())
            .lt("log_date", end.isoformat())
            .order("log_date", desc=True),
            "retrieve previous days macros",
        )
        return [_parse_log(row) for row in rows]

    def delete_log(self, log_id: str, user_id: str) -> MealLogEntry:
        """Delete a log owned by the user and return it."""
        rows = execute(
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(log_id))
            .eq("user_id", str(user_id)),
            "delete macro log",
        )
        if not rows:
            raise NotFoundError(
                "Log entry not found or user does not have permission to delete.",
                error="Failed to delete meal",
            )
        return _parse_log(rows[0])

    def reassign_user(self, old_user_id: str, new_user_id: str) -> int:
        """Move every log from one user id to another."""
        rows = execute(
            self.client.table(_TABLE)
            .update({"user_id": str(new_user_id)})
            .eq("user_id", str(old_user_id)),
            "migrate macro logs",
        )
        return len(rows)


def _parse_log(row: dict[str, object]) -> MealLogEntry:
    meal_time = parse_datetime(row.get("meal_time"))
    log_date = parse_date(row.get("log_date"))
    return MealLogEntry(
        id=str(row["id"]),
        user_id=str(row.get("user_id", "")),
        log_date=log_date,
        meal_time=meal_time or datetime.combine(log_date, datetime.min.time()),
        food_item=str(row.get("food_item", "")),
        protein_g=as_float(row.get("protein_g")),
        carbs_g=as_float(row.get("carbs_g")),
        fats_g=as_float(row.get("fats_g")),
        calories=as_float(row.get("calories")),
    )
