"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macromate.adapters.openai_completion_client import OpenAICompletionClient
from macromate.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from macromate.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from macromate.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from macromate.config import Settings
from macromate.services.extraction import MacroExtractionService
from macromate.services.favorites import FavoriteService
from macromate.services.meals import MealLogService
from macromate.services.nutrition import NutritionLookupService
from macromate.services.rate_limit import FixedWindowRateLimiter
from macromate.services.stats import StatsService
from macromate.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    extraction_service: MacroExtractionService
    nutrition_service: NutritionLookupService
    meal_log_service: MealLogService
    favorite_service: FavoriteService
    stats_service: StatsService
    user_service: UserService
    rate_limiter: FixedWindowRateLimiter
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    meal_log_repository = SupabaseMealLogRepository(supabase_client)
    favorite_repository = SupabaseFavoriteRepository(supabase_client)
    completion_client = OpenAICompletionClient.create(
        resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        timeout=resolved_settings.http_timeout_seconds,
    )
    product_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.openfoodfacts_base_url,
        user_agent=resolved_settings.openfoodfacts_user_agent,
        timeout=resolved_settings.http_timeout_seconds,
    )
    meal_log_service = MealLogService(meal_log_repository)

    async def close_resources() -> None:
        await completion_client.close()
        await product_client.close()

    return AppContainer(
        settings=resolved_settings,
        extraction_service=MacroExtractionService(completion_client),
        nutrition_service=NutritionLookupService(product_client),
        meal_log_service=meal_log_service,
        favorite_service=FavoriteService(
            repository=favorite_repository,
            meal_log_service=meal_log_service,
        ),
        stats_service=StatsService(meal_log_repository),
        user_service=UserService(
            meal_log_repository=meal_log_repository,
            favorite_repository=favorite_repository,
        ),
        rate_limiter=FixedWindowRateLimiter(
            limit=resolved_settings.rate_limit_requests,
            window_seconds=resolved_settings.rate_limit_window_seconds,
        ),
        close_resources=close_resources,
    )
