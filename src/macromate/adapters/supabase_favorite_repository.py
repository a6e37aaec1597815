"""Supabase implementation for favorite foods."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from macromate.adapters.supabase_support import as_float, execute, parse_datetime
from macromate.domain.errors import ConflictError, NotFoundError, StoreError
from macromate.domain.macros import FavoriteFoodItem, MacroRecord
from macromate.services.favorites import FavoriteRepository
from macromate.validation import round_half_up

_TABLE = "favorite_foods"


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase-backed repository for user favorites."""

    client: Client

    def create_favorite(
        self, user_id: str, food_item: str, macros: MacroRecord
    ) -> FavoriteFoodItem:
        """Create a favorite, raising ConflictError if the label exists.

        The pre-check gives a clean error for the common case; the table's
        unique (user_id, food_item) constraint covers concurrent inserts.
        """
        existing = execute(
            self.client.table(_TABLE)
            .select("id")
            .eq("user_id", str(user_id))
            .eq("food_item", food_item)
            .limit(1),
            "check existing favorite",
        )
        if existing:
            raise _duplicate_error()
        rows = execute(
            self.client.table(_TABLE).insert(
                {
                    "user_id": str(user_id),
                    "food_item": food_item,
                    "protein_g": round_half_up(macros.protein_g, 1),
                    "carbs_g": round_half_up(macros.carbs_g, 1),
                    "fats_g": round_half_up(macros.fats_g, 1),
                    "calories": round_half_up(macros.calories, 1),
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            ),
            "save favorite item",
            conflict=_duplicate_error(),
        )
        if not rows:
            raise StoreError("Failed to save favorite item")
        return _parse_favorite(rows[0])

    def get_favorite(self, favorite_id: str, user_id: str) -> FavoriteFoodItem | None:
        """Return a favorite owned by the user, if present."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(favorite_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "retrieve favorite item",
        )
        if not rows:
            return None
        return _parse_favorite(rows[0])

    def list_favorites(self, user_id: str) -> list[FavoriteFoodItem]:
        """Return a user's favorites, newest first."""
        rows = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True),
            "retrieve favorite items",
        )
        return [_parse_favorite(row) for row in rows]

    def delete_favorite(self, favorite_id: str, user_id: str) -> FavoriteFoodItem:
        """Delete a favorite owned by the user and return it."""
        rows = execute(
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(favorite_id))
            .eq("user_id", str(user_id)),
            "delete favorite item",
        )
        if not rows:
            raise NotFoundError(
                "Favorite item not found or user does not have permission to delete.",
                error="Failed to remove from favourites",
            )
        return _parse_favorite(rows[0])

    def rename_favorite(
        self, favorite_id: str, user_id: str, food_item: str
    ) -> FavoriteFoodItem:
        """Rename a favorite owned by the user and return it."""
        rows = execute(
            self.client.table(_TABLE)
            .update({"food_item": food_item})
            .eq("id", str(favorite_id))
            .eq("user_id", str(user_id)),
            "update favorite item",
        )
        if not rows:
            raise NotFoundError(
                "Favorite item not found or user does not have permission to edit.",
                error="Failed to update favorite",
            )
        return _parse_favorite(rows[0])

    def reassign_user(self, old_user_id: str, new_user_id: str) -> int:
        """Move every favorite from one user id to another."""
        rows = execute(
            self.client.table(_TABLE)
            .update({"user_id": str(new_user_id)})
            .eq("user_id", str(old_user_id)),
            "migrate favorite items",
        )
        return len(rows)


def _duplicate_error() -> ConflictError:
    return ConflictError(
        "This item is already in your favorites!", error="Already in favourites!"
    )


def _parse_favorite(row: dict[str, object]) -> FavoriteFoodItem:
    return FavoriteFoodItem(
        id=str(row["id"]),
        user_id=str(row.get("user_id", "")),
        food_item=str(row.get("food_item", "")),
        protein_g=as_float(row.get("protein_g")),
        carbs_g=as_float(row.get("carbs_g")),
        fats_g=as_float(row.get("fats_g")),
        calories=as_float(row.get("calories")),
        created_at=parse_datetime(row.get("created_at")),
    )
