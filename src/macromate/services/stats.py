"""Daily and multi-day macro summaries."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from macromate.domain.macros import DailySummary, MealLogEntry
from macromate.services.meals import MealLogRepository, utc_now
from macromate.validation import round_half_up, validate_days


@dataclass
class StatsService:
    """Service for computing per-day macro totals."""

    repository: MealLogRepository
    clock: Callable[[], datetime] = field(default=utc_now)

    def get_day(
        self, user_id: str, log_date: date | None = None
    ) -> tuple[DailySummary, list[MealLogEntry]]:
        """Return totals and meals for a date, defaulting to today (UTC)."""
        day = log_date or self.clock().date()
        entries = self.repository.list_logs_for_date(user_id, day)
        return aggregate_day(day, entries), entries

    def get_past_days(self, user_id: str, number_of_days: int) -> list[DailySummary]:
        """Return summaries for the days before today, newest first."""
        validate_days(number_of_days)
        today = self.clock().date()
        start = today - timedelta(days=number_of_days)
        entries = self.repository.list_logs_in_range(user_id, start, today)
        return aggregate_range(entries, number_of_days)


def aggregate_day(day: date, entries: Iterable[MealLogEntry]) -> DailySummary:
    """Sum entry macros into a summary, rounding totals to one decimal."""
    protein = carbs = fats = calories = 0.0
    for entry in entries:
        protein += entry.protein_g
        carbs += entry.carbs_g
        fats += entry.fats_g
        calories += entry.calories
    return DailySummary(
        date=day,
        total_protein=round_half_up(protein, 1),
        total_carbs=round_half_up(carbs, 1),
        total_fats=round_half_up(fats, 1),
        total_calories=round_half_up(calories, 1),
    )


def aggregate_range(
    entries: Iterable[MealLogEntry], number_of_days: int
) -> list[DailySummary]:
    """Group entries by date, newest first; days without entries are omitted."""
    validate_days(number_of_days)
    by_day: dict[date, list[MealLogEntry]] = {}
    for entry in entries:
        by_day.setdefault(entry.log_date, []).append(entry)
    return [aggregate_day(day, by_day[day]) for day in sorted(by_day, reverse=True)]
