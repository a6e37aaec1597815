"""Tests for meal logging service."""

from datetime import date

import pytest

from macromate.domain.errors import NotFoundError
from macromate.domain.macros import MacroRecord
from macromate.services.meals import MealLogService
from tests.conftest import FIXED_NOW, InMemoryMealLogRepository, fixed_clock


def test_log_macros_stamps_today() -> None:
    repo = InMemoryMealLogRepository()
    service = MealLogService(repo, clock=fixed_clock)

    entry = service.log_macros(
        "user-1",
        MacroRecord(
            protein_g=20, carbs_g=10, fats_g=5, calories=165, parsed_food_item="eggs"
        ),
    )

    assert entry.log_date == date(2024, 5, 20)
    assert entry.meal_time == FIXED_NOW
    assert entry.food_item == "eggs"
    assert repo.entries == [entry]


def test_relog_duplicates_values() -> None:
    repo = InMemoryMealLogRepository()
    service = MealLogService(repo, clock=fixed_clock)

    entry = service.relog("user-1", "porridge", 8, 45, 6, 260)

    assert (entry.protein_g, entry.carbs_g, entry.fats_g, entry.calories) == (
        8,
        45,
        6,
        260,
    )


def test_delete_log_requires_matching_user() -> None:
    repo = InMemoryMealLogRepository()
    service = MealLogService(repo, clock=fixed_clock)
    entry = service.relog("owner", "toast", 3, 15, 1, 80)

    with pytest.raises(NotFoundError):
        service.delete_log(entry.id, "intruder")

    assert repo.entries == [entry]
    assert service.delete_log(entry.id, "owner") == entry
    assert repo.entries == []


def test_list_for_day_is_ordered_by_meal_time() -> None:
    repo = InMemoryMealLogRepository()
    service = MealLogService(repo, clock=fixed_clock)
    first = service.relog("user-1", "breakfast", 1, 1, 1, 1)
    second = service.relog("user-1", "lunch", 1, 1, 1, 1)

    assert service.list_for_day("user-1", date(2024, 5, 20)) == [first, second]
