"""User data migration endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from macromate.api import presenters
from macromate.api.models import MigrateUserRequest
from macromate.domain.errors import ValidationError

if TYPE_CHECKING:
    from macromate.containers import AppContainer

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/migrate-user")
async def migrate_user(body: MigrateUserRequest, request: Request) -> dict[str, object]:
    """Move all rows owned by a Telegram id to an auth user id."""
    container: AppContainer = request.app.state.container
    if not body.telegram_id or not body.supabase_user_id:
        raise ValidationError(
            "telegramId and supabaseUserId are required",
            error="telegramId and supabaseUserId are required",
        )
    result = container.user_service.migrate(body.telegram_id, body.supabase_user_id)
    return presenters.ok(
        {"mealLogs": result.meal_logs, "favorites": result.favorites},
        "Migration completed",
    )
