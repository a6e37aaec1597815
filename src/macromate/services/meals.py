"""Meal logging service."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol

from macromate.domain.macros import MacroRecord, MealLogEntry


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def create_log(  # noqa: PLR0913
        self,
        user_id: str,
        log_date: date,
        meal_time: datetime,
        food_item: str,
        macros: MacroRecord,
    ) -> MealLogEntry:
        """Create a meal log row and return it."""

    def list_logs_for_date(self, user_id: str, log_date: date) -> list[MealLogEntry]:
        """Return a user's logs for a date, ordered by meal time."""

    def list_logs_in_range(
        self, user_id: str, start: date, end: date
    ) -> list[MealLogEntry]:
        """Return a user's logs with start <= log_date < end."""

    def delete_log(self, log_id: str, user_id: str) -> MealLogEntry:
        """Delete a log owned by the user and return it."""

    def reassign_user(self, old_user_id: str, new_user_id: str) -> int:
        """Move every log from one user id to another."""


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


@dataclass
class MealLogService:
    """Application service for logging meals."""

    repository: MealLogRepository
    clock: Callable[[], datetime] = field(default=utc_now)

    def today(self) -> date:
        """Return the current UTC calendar date."""
        return self.clock().date()

    def log_macros(self, user_id: str, macros: MacroRecord) -> MealLogEntry:
        """Persist a macro record as a meal eaten now."""
        now = self.clock()
        return self.repository.create_log(
            user_id=user_id,
            log_date=now.date(),
            meal_time=now,
            food_item=macros.parsed_food_item,
            macros=macros,
        )

    def relog(  # noqa: PLR0913
        self,
        user_id: str,
        food_item: str,
        protein_g: float,
        carbs_g: float,
        fats_g: float,
        calories: float,
    ) -> MealLogEntry:
        """Duplicate an arbitrary macro entry into today's log."""
        return self.log_macros(
            user_id,
            MacroRecord(
                protein_g=protein_g,
                carbs_g=carbs_g,
                fats_g=fats_g,
                calories=calories,
                parsed_food_item=food_item,
            ),
        )

    def list_for_day(self, user_id: str, log_date: date) -> list[MealLogEntry]:
        """Return the meals logged on a date."""
        return self.repository.list_logs_for_date(user_id, log_date)

    def delete_log(self, log_id: str, user_id: str) -> MealLogEntry:
        """Delete one of the user's meals."""
        return self.repository.delete_log(log_id, user_id)
