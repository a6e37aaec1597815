"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4

import pytest

from macromate.adapters.openfoodfacts_client import ProductClient
from macromate.config import Settings
from macromate.containers import AppContainer
from macromate.domain.errors import ConflictError, NotFoundError
from macromate.domain.macros import FavoriteFoodItem, MacroRecord, MealLogEntry
from macromate.services.extraction import CompletionClient, MacroExtractionService
from macromate.services.favorites import FavoriteRepository, FavoriteService
from macromate.services.meals import MealLogRepository, MealLogService
from macromate.services.nutrition import NutritionLookupService
from macromate.services.rate_limit import FixedWindowRateLimiter
from macromate.services.stats import StatsService
from macromate.services.users import UserService

FIXED_NOW = datetime(2024, 5, 20, 12, 30, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_entry(  # noqa: PLR0913
    log_date: date,
    protein_g: float = 0,
    carbs_g: float = 0,
    fats_g: float = 0,
    calories: float = 0,
    user_id: str = "user-1",
    food_item: str = "food",
) -> MealLogEntry:
    return MealLogEntry(
        id=str(uuid4()),
        user_id=user_id,
        log_date=log_date,
        meal_time=datetime.combine(log_date, datetime.min.time(), tzinfo=UTC),
        food_item=food_item,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fats_g=fats_g,
        calories=calories,
    )


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    entries: list[MealLogEntry] = field(default_factory=list)

    def create_log(  # noqa: PLR0913
        self,
        user_id: str,
        log_date: date,
        meal_time: datetime,
        food_item: str,
        macros: MacroRecord,
    ) -> MealLogEntry:
        entry = MealLogEntry(
            id=str(uuid4()),
            user_id=user_id,
            log_date=log_date,
            meal_time=meal_time,
            food_item=food_item,
            protein_g=macros.protein_g,
            carbs_g=macros.carbs_g,
            fats_g=macros.fats_g,
            calories=macros.calories,
        )
        self.entries.append(entry)
        return entry

    def list_logs_for_date(self, user_id: str, log_date: date) -> list[MealLogEntry]:
        rows = [
            entry
            for entry in self.entries
            if entry.user_id == user_id and entry.log_date == log_date
        ]
        return sorted(rows, key=lambda entry: entry.meal_time)

    def list_logs_in_range(
        self, user_id: str, start: date, end: date
    ) -> list[MealLogEntry]:
        return [
            entry
            for entry in self.entries
            if entry.user_id == user_id and start <= entry.log_date < end
        ]

    def delete_log(self, log_id: str, user_id: str) -> MealLogEntry:
        for entry in self.entries:
            if entry.id == log_id and entry.user_id == user_id:
                self.entries.remove(entry)
                return entry
        raise NotFoundError(
            "Log entry not found or user does not have permission to delete."
        )

    def reassign_user(self, old_user_id: str, new_user_id: str) -> int:
        moved = 0
        for index, entry in enumerate(self.entries):
            if entry.user_id == old_user_id:
                self.entries[index] = MealLogEntry(
                    id=entry.id,
                    user_id=new_user_id,
                    log_date=entry.log_date,
                    meal_time=entry.meal_time,
                    food_item=entry.food_item,
                    protein_g=entry.protein_g,
                    carbs_g=entry.carbs_g,
                    fats_g=entry.fats_g,
                    calories=entry.calories,
                )
                moved += 1
        return moved


@dataclass
class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory favorites repository for tests."""

    favorites: list[FavoriteFoodItem] = field(default_factory=list)

    def create_favorite(
        self, user_id: str, food_item: str, macros: MacroRecord
    ) -> FavoriteFoodItem:
        for favorite in self.favorites:
            if favorite.user_id == user_id and favorite.food_item == food_item:
                raise ConflictError(
                    "This item is already in your favorites!",
                    error="Already in favourites!",
                )
        favorite = FavoriteFoodItem(
            id=str(uuid4()),
            user_id=user_id,
            food_item=food_item,
            protein_g=macros.protein_g,
            carbs_g=macros.carbs_g,
            fats_g=macros.fats_g,
            calories=macros.calories,
            created_at=datetime.now(tz=UTC),
        )
        self.favorites.append(favorite)
        return favorite

    def get_favorite(self, favorite_id: str, user_id: str) -> FavoriteFoodItem | None:
        for favorite in self.favorites:
            if favorite.id == favorite_id and favorite.user_id == user_id:
                return favorite
        return None

    def list_favorites(self, user_id: str) -> list[FavoriteFoodItem]:
        rows = [fav for fav in self.favorites if fav.user_id == user_id]
        return sorted(rows, key=lambda fav: fav.created_at, reverse=True)

    def delete_favorite(self, favorite_id: str, user_id: str) -> FavoriteFoodItem:
        favorite = self.get_favorite(favorite_id, user_id)
        if favorite is None:
            raise NotFoundError("Favorite item not found")
        self.favorites.remove(favorite)
        return favorite

    def rename_favorite(
        self, favorite_id: str, user_id: str, food_item: str
    ) -> FavoriteFoodItem:
        favorite = self.get_favorite(favorite_id, user_id)
        if favorite is None:
            raise NotFoundError("Favorite item not found")
        renamed = FavoriteFoodItem(
            id=favorite.id,
            user_id=favorite.user_id,
            food_item=food_item,
            protein_g=favorite.protein_g,
            carbs_g=favorite.carbs_g,
            fats_g=favorite.fats_g,
            calories=favorite.calories,
            created_at=favorite.created_at,
        )
        self.favorites[self.favorites.index(favorite)] = renamed
        return renamed

    def reassign_user(self, old_user_id: str, new_user_id: str) -> int:
        moved = 0
        for index, fav in enumerate(self.favorites):
            if fav.user_id == old_user_id:
                self.favorites[index] = FavoriteFoodItem(
                    id=fav.id,
                    user_id=new_user_id,
                    food_item=fav.food_item,
                    protein_g=fav.protein_g,
                    carbs_g=fav.carbs_g,
                    fats_g=fav.fats_g,
                    calories=fav.calories,
                    created_at=fav.created_at,
                )
                moved += 1
        return moved


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client returning a fixed reply."""

    reply: str = field(
        default_factory=lambda: "Here you go:\n"
        + json.dumps(
            {
                "protein_g": 31.0,
                "carbs_g": 0.0,
                "fats_g": 3.6,
                "calories": 165,
                "parsed_food_item": "100g chicken breast",
            }
        )
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)
    image_urls: list[str | None] = field(default_factory=list)

    async def complete(self, prompt: str, image_data_url: str | None = None) -> str:
        self.prompts.append(prompt)
        self.image_urls.append(image_data_url)
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class FakeProductClient(ProductClient):
    """Fake Open Food Facts client with an in-memory response."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "status": 1,
            "product": {
                "brands": "Heinz",
                "product_name": "Baked Beans",
                "nutriments": {
                    "proteins_100g": 4.7,
                    "carbohydrates_100g": 12.5,
                    "fat_100g": 0.2,
                    "energy-kcal_100g": 78,
                },
            },
        }
    )
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.calls.append(barcode)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        supabase_url="https://example.supabase.co",
        supabase_key="anon-key",
        environment="test",
    )


@pytest.fixture
def meal_log_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def favorite_repository() -> InMemoryFavoriteRepository:
    return InMemoryFavoriteRepository()


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def product_client() -> FakeProductClient:
    return FakeProductClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    meal_log_repository: InMemoryMealLogRepository,
    favorite_repository: InMemoryFavoriteRepository,
    completion_client: FakeCompletionClient,
    product_client: FakeProductClient,
) -> AppContainer:
    meal_log_service = MealLogService(meal_log_repository, clock=fixed_clock)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        extraction_service=MacroExtractionService(completion_client),
        nutrition_service=NutritionLookupService(product_client),
        meal_log_service=meal_log_service,
        favorite_service=FavoriteService(
            repository=favorite_repository,
            meal_log_service=meal_log_service,
        ),
        stats_service=StatsService(meal_log_repository, clock=fixed_clock),
        user_service=UserService(
            meal_log_repository=meal_log_repository,
            favorite_repository=favorite_repository,
        ),
        rate_limiter=FixedWindowRateLimiter(
            limit=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        close_resources=close_resources,
    )
