"""Request models for the REST API."""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def _stringify(value: object) -> object:
    """Accept numeric identifiers (e.g. Telegram ids) as strings."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


IdString = Annotated[str, BeforeValidator(_stringify)]
Number = int | float | str


class ApiModel(BaseModel):
    """Base model accepting camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalculateMacrosRequest(ApiModel):
    """Body for free-text macro calculation."""

    food_description: str | None = None
    user_id: IdString | None = None


class BarcodeMacrosRequest(ApiModel):
    """Body for barcode lookups."""

    barcode: IdString | None = None
    user_id: IdString | None = None
    weight: Number | None = None


class FavoriteCreateRequest(ApiModel):
    """Body for saving a favorite food."""

    food_item: str | None = None
    protein: Number | None = None
    carbs: Number | None = None
    fats: Number | None = None
    calories: Number | None = None


class FavoriteRenameRequest(ApiModel):
    """Body for renaming a favorite food."""

    food_item: str | None = None


class AddFavoriteToMealsRequest(ApiModel):
    """Body for logging a favorite as a meal."""

    favorite_id: IdString | None = None


class RelogRequest(ApiModel):
    """Body for duplicating a past entry into today's log."""

    user_id: IdString | None = None
    food_item: IdString | None = None
    protein: Number | None = None
    carbs: Number | None = None
    fats: Number | None = None
    calories: Number | None = None


class MigrateUserRequest(ApiModel):
    """Body for moving data from a Telegram id to an auth user id."""

    telegram_id: IdString | None = None
    supabase_user_id: IdString | None = None
