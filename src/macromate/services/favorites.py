"""Services for managing favorite foods."""

from dataclasses import dataclass
from typing import Protocol

from macromate.domain.errors import NotFoundError, ValidationError
from macromate.domain.macros import FavoriteFoodItem, MacroRecord, MealLogEntry
from macromate.services.meals import MealLogService


class FavoriteRepository(Protocol):
    """Persistence interface for favorite foods."""

    def create_favorite(
        self, user_id: str, food_item: str, macros: MacroRecord
    ) -> FavoriteFoodItem:
        """Create a favorite, raising ConflictError if the label exists."""

    def get_favorite(self, favorite_id: str, user_id: str) -> FavoriteFoodItem | None:
        """Return a favorite owned by the user, if present."""

    def list_favorites(self, user_id: str) -> list[FavoriteFoodItem]:
        """Return a user's favorites, newest first."""

    def delete_favorite(self, favorite_id: str, user_id: str) -> FavoriteFoodItem:
        """Delete a favorite owned by the user and return it."""

    def rename_favorite(
        self, favorite_id: str, user_id: str, food_item: str
    ) -> FavoriteFoodItem:
        """Rename a favorite owned by the user and return it."""

    def reassign_user(self, old_user_id: str, new_user_id: str) -> int:
        """Move every favorite from one user id to another."""


@dataclass
class FavoriteService:
    """Application service for favorite foods."""

    repository: FavoriteRepository
    meal_log_service: MealLogService

    def add(self, user_id: str, macros: MacroRecord) -> FavoriteFoodItem:
        """Save a food to the user's favorites."""
        return self.repository.create_favorite(
            user_id, macros.parsed_food_item, macros
        )

    def list_for_user(self, user_id: str) -> list[FavoriteFoodItem]:
        """Return the user's favorites."""
        return self.repository.list_favorites(user_id)

    def rename(
        self, favorite_id: str, user_id: str, food_item: str
    ) -> FavoriteFoodItem:
        """Rename a favorite; macros are not editable."""
        label = food_item.strip()
        if not label:
            raise ValidationError(
                "Food item name is required", error="Food item name is required"
            )
        return self.repository.rename_favorite(favorite_id, user_id, label)

    def remove(self, favorite_id: str, user_id: str) -> FavoriteFoodItem:
        """Delete a favorite."""
        return self.repository.delete_favorite(favorite_id, user_id)

    def add_to_meals(self, favorite_id: str, user_id: str) -> MealLogEntry:
        """Log a favorite as a meal eaten now."""
        favorite = self.repository.get_favorite(favorite_id, user_id)
        if favorite is None:
            raise NotFoundError(
                "Favourite item not found", error="Favourite item not found"
            )
        return self.meal_log_service.log_macros(
            user_id,
            MacroRecord(
                protein_g=favorite.protein_g,
                carbs_g=favorite.carbs_g,
                fats_g=favorite.fats_g,
                calories=favorite.calories,
                parsed_food_item=favorite.food_item,
            ),
        )
