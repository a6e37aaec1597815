"""User identity migration."""

import logging
from dataclasses import dataclass

from macromate.domain.errors import ValidationError
from macromate.services.favorites import FavoriteRepository
from macromate.services.meals import MealLogRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationResult:
    """Number of rows moved to the new user id, per table."""

    meal_logs: int
    favorites: int


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    meal_log_repository: MealLogRepository
    favorite_repository: FavoriteRepository

    def migrate(self, old_user_id: str, new_user_id: str) -> MigrationResult:
        """Re-own every meal log and favorite from one user id to another."""
        old_id = old_user_id.strip()
        new_id = new_user_id.strip()
        if not old_id or not new_id:
            raise ValidationError("telegramId and supabaseUserId are required")
        meal_logs = self.meal_log_repository.reassign_user(old_id, new_id)
        favorites = self.favorite_repository.reassign_user(old_id, new_id)
        _logger.info(
            "Migrated user data",
            extra={"meal_logs": meal_logs, "favorites": favorites},
        )
        return MigrationResult(meal_logs=meal_logs, favorites=favorites)
