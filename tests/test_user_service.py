"""Tests for user data migration."""

from datetime import date

import pytest

from macromate.domain.errors import ValidationError
from macromate.domain.macros import MacroRecord
from macromate.services.users import UserService
from tests.conftest import (
    InMemoryFavoriteRepository,
    InMemoryMealLogRepository,
    make_entry,
)


def test_migrate_moves_logs_and_favorites() -> None:
    meal_repo = InMemoryMealLogRepository()
    meal_repo.entries = [
        make_entry(date(2024, 5, 1), user_id="123456"),
        make_entry(date(2024, 5, 2), user_id="123456"),
        make_entry(date(2024, 5, 2), user_id="other"),
    ]
    favorite_repo = InMemoryFavoriteRepository()
    favorite_repo.create_favorite(
        "123456", "Oats", MacroRecord(5, 27, 3, 150, "Oats")
    )
    service = UserService(meal_repo, favorite_repo)

    result = service.migrate("123456", "auth-uuid")

    assert result.meal_logs == 2
    assert result.favorites == 1
    assert {entry.user_id for entry in meal_repo.entries} == {"auth-uuid", "other"}
    assert favorite_repo.list_favorites("auth-uuid")[0].food_item == "Oats"


def test_migrate_requires_both_ids() -> None:
    service = UserService(InMemoryMealLogRepository(), InMemoryFavoriteRepository())

    with pytest.raises(ValidationError):
        service.migrate("123", " ")
