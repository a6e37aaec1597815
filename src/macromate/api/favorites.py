"""Favorite food endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from macromate.api import presenters
from macromate.api.models import (
    AddFavoriteToMealsRequest,
    FavoriteCreateRequest,
    FavoriteRenameRequest,
)
from macromate.domain.errors import ValidationError
from macromate.domain.macros import MacroRecord
from macromate.validation import coerce_float, coerce_grams

if TYPE_CHECKING:
    from macromate.containers import AppContainer

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


@router.get("/{user_id}")
async def list_favorites(user_id: str, request: Request) -> dict[str, object]:
    """Return the user's favorites, newest first."""
    container: AppContainer = request.app.state.container
    favorites = container.favorite_service.list_for_user(user_id)
    data: dict[str, object] = {
        "favorites": [presenters.favorite(item) for item in favorites]
    }
    if not favorites:
        data["message"] = "You don't have any favourite foods yet!"
    return presenters.ok(data)


@router.post("/{user_id}")
async def add_favorite(
    user_id: str, body: FavoriteCreateRequest, request: Request
) -> dict[str, object]:
    """Save a food and its macros to the user's favorites."""
    container: AppContainer = request.app.state.container
    required = (body.protein, body.carbs, body.fats, body.calories)
    if not body.food_item or any(value is None for value in required):
        raise ValidationError(
            "Missing required fields: foodItem, protein, carbs, fats, calories",
            error="Missing required fields: foodItem, protein, carbs, fats, calories",
        )
    favorite = container.favorite_service.add(
        user_id,
        MacroRecord(
            protein_g=coerce_grams(body.protein, "protein"),
            carbs_g=coerce_grams(body.carbs, "carbs"),
            fats_g=coerce_grams(body.fats, "fats"),
            calories=coerce_float(body.calories, "calories"),
            parsed_food_item=body.food_item,
        ),
    )
    return presenters.ok(presenters.favorite(favorite), "Added to favourites!")


@router.post("/{user_id}/add-to-meals")
async def add_favorite_to_meals(
    user_id: str, body: AddFavoriteToMealsRequest, request: Request
) -> dict[str, object]:
    """Log a favorite as a meal eaten now."""
    container: AppContainer = request.app.state.container
    if not body.favorite_id:
        raise ValidationError(
            "Missing favoriteId in request body",
            error="Missing favoriteId in request body",
        )
    entry = container.favorite_service.add_to_meals(body.favorite_id, user_id)
    return presenters.ok(presenters.meal(entry), "Added to today's meals!")


@router.put("/{user_id}/{favorite_id}")
async def rename_favorite(
    user_id: str, favorite_id: str, body: FavoriteRenameRequest, request: Request
) -> dict[str, object]:
    """Rename a favorite."""
    container: AppContainer = request.app.state.container
    updated = container.favorite_service.rename(
        favorite_id, user_id, body.food_item or ""
    )
    return presenters.ok(
        presenters.favorite(updated), "Favorite updated successfully!"
    )


@router.delete("/{user_id}/{favorite_id}")
async def delete_favorite(
    user_id: str, favorite_id: str, request: Request
) -> dict[str, object]:
    """Remove a favorite."""
    container: AppContainer = request.app.state.container
    deleted = container.favorite_service.remove(favorite_id, user_id)
    return presenters.ok(presenters.favorite(deleted), "Removed from favourites!")
