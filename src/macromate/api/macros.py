"""Macro calculation and meal log endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, File, Form, Query, Request, UploadFile
from fastapi.responses import JSONResponse

from macromate.api import presenters
from macromate.api.models import (
    BarcodeMacrosRequest,
    CalculateMacrosRequest,
    RelogRequest,
)
from macromate.domain.errors import ValidationError
from macromate.services.images import (
    MAX_IMAGE_BYTES,
    detect_image_type,
    is_acceptable_upload,
)
from macromate.services.nutrition import parse_barcode, parse_weight
from macromate.validation import (
    coerce_float,
    coerce_grams,
    parse_days,
    parse_log_date,
)

if TYPE_CHECKING:
    from macromate.containers import AppContainer

router = APIRouter(prefix="/api", tags=["macros"])

_logger = logging.getLogger(__name__)


@router.get("/test-service")
async def test_service(request: Request) -> dict[str, object]:
    """Run a sample description through the extraction pipeline."""
    container: AppContainer = request.app.state.container
    result = await container.extraction_service.self_test()
    return presenters.ok(
        {
            "protein_g": result.protein_g,
            "carbs_g": result.carbs_g,
            "fats_g": result.fats_g,
            "calories": result.calories,
            "parsed_food_item": result.parsed_food_item,
        }
    )


@router.post("/calculate-macros", response_model=None)
async def calculate_macros(
    body: CalculateMacrosRequest, request: Request
) -> dict[str, object] | JSONResponse:
    """Estimate macros for a food description and log them."""
    container: AppContainer = request.app.state.container
    if not body.food_description or not body.user_id:
        raise ValidationError(
            "Missing required fields: foodDescription and userId",
            error="Missing required fields: foodDescription and userId",
        )

    macros = await container.extraction_service.calculate_from_text(
        body.food_description
    )
    if macros.is_empty:
        return presenters.error_response(
            400,
            "Could not calculate macros",
            (
                f'I couldn\'t calculate macros for "{body.food_description}". '
                "Please try being more specific about the food items and quantities."
            ),
            suggestion='Example: "100g chicken breast" or "1 medium apple"',
        )

    entry = container.meal_log_service.log_macros(body.user_id, macros)
    return presenters.ok(presenters.calculated_meal(macros, entry))


@router.post("/calculate-image-macros", response_model=None)
async def calculate_image_macros(
    request: Request,
    image: UploadFile | None = File(default=None),
    weight: str | None = Form(default=None),
    user_id: str | None = Form(default=None, alias="userId"),
) -> dict[str, object] | JSONResponse:
    """Estimate macros from a nutrition-label photo and log them."""
    container: AppContainer = request.app.state.container
    if image is None or not user_id:
        raise ValidationError(
            "Missing required fields: image file and userId",
            error="Missing required fields: image file and userId",
        )
    if not is_acceptable_upload(image.content_type, image.filename):
        raise ValidationError(
            "Only image files are allowed", error="Invalid file type"
        )
    image_bytes = await image.read(MAX_IMAGE_BYTES + 1)
    if len(image_bytes) > MAX_IMAGE_BYTES:
        raise ValidationError(
            "Images must be 10MB or smaller", error="File too large"
        )

    mime_type = detect_image_type(image_bytes, image.content_type)
    _logger.info(
        "Received image upload",
        extra={
            "declared_type": image.content_type,
            "detected_type": mime_type,
            "size": len(image_bytes),
        },
    )
    if mime_type is None:
        raise ValidationError(
            "Please upload a valid image file (JPG, PNG, GIF, WebP)",
            error="Invalid file type",
        )

    macros = await container.extraction_service.calculate_from_image(
        image_bytes, mime_type, weight
    )
    if macros.is_empty:
        return presenters.error_response(
            400,
            "Could not calculate macros from image",
            (
                "I couldn't calculate macros from this image. Please try again "
                "with a clearer nutrition label or include the weight."
            ),
            suggestion=(
                'Example: Upload a clear nutrition label image with weight "100g"'
            ),
        )

    entry = container.meal_log_service.log_macros(user_id, macros)
    return presenters.ok(presenters.calculated_meal(macros, entry))


@router.post("/barcode-macros")
async def barcode_macros(
    body: BarcodeMacrosRequest, request: Request
) -> dict[str, object]:
    """Look up a barcode in Open Food Facts, scale to weight and log it."""
    container: AppContainer = request.app.state.container
    if not body.barcode or not body.user_id:
        raise ValidationError(
            "Missing required fields: barcode and userId",
            error="Missing required fields: barcode and userId",
        )
    barcode = parse_barcode(body.barcode)
    weight_g = parse_weight(body.weight)

    product = await container.nutrition_service.lookup_by_barcode(barcode, weight_g)
    entry = container.meal_log_service.log_macros(body.user_id, product.macros)
    return presenters.ok(presenters.barcode_meal(product, entry))


@router.get("/today-macros/{user_id}")
async def today_macros(user_id: str, request: Request) -> dict[str, object]:
    """Return today's totals and meals."""
    container: AppContainer = request.app.state.container
    summary, entries = container.stats_service.get_day(user_id)
    data = presenters.day(summary, entries)
    if not entries:
        data["message"] = "No food entries logged for today yet!"
    return presenters.ok(data)


@router.get("/day-macros/{user_id}/{log_date}")
async def day_macros(
    user_id: str, log_date: str, request: Request
) -> dict[str, object]:
    """Return totals and meals for a specific date."""
    container: AppContainer = request.app.state.container
    day = parse_log_date(log_date)
    summary, entries = container.stats_service.get_day(user_id, day)
    data = presenters.day(summary, entries)
    if not entries:
        data["message"] = "No food entries logged for this day."
    return presenters.ok(data)


@router.get("/past-macros/{user_id}")
@router.get("/past-macros/{user_id}/{days}")
async def past_macros(
    user_id: str, request: Request, days: str | None = None
) -> dict[str, object]:
    """Return per-day totals for previous days, newest first."""
    container: AppContainer = request.app.state.container
    number_of_days = parse_days(days)
    summaries = container.stats_service.get_past_days(user_id, number_of_days)
    data: dict[str, object] = {
        "days": number_of_days,
        "dailySummaries": [presenters.daily_summary(item) for item in summaries],
    }
    if not summaries:
        data["message"] = f"No macro data found for the past {number_of_days} days."
    return presenters.ok(data)


@router.delete("/macro-log/{log_id}")
async def delete_macro_log(
    log_id: str,
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
) -> dict[str, object]:
    """Delete one of the user's logged meals."""
    container: AppContainer = request.app.state.container
    if not user_id:
        raise ValidationError(
            "Missing userId in query parameters",
            error="Missing userId in query parameters",
        )
    deleted = container.meal_log_service.delete_log(log_id, user_id)
    return presenters.ok(presenters.meal(deleted), "Meal removed successfully!")


@router.post("/relog-macro")
async def relog_macro(body: RelogRequest, request: Request) -> dict[str, object]:
    """Duplicate a past entry into today's log."""
    container: AppContainer = request.app.state.container
    required = (body.protein, body.carbs, body.fats, body.calories)
    if not body.user_id or not body.food_item or any(v is None for v in required):
        raise ValidationError(
            "Missing required fields", error="Missing required fields"
        )
    entry = container.meal_log_service.relog(
        body.user_id,
        body.food_item,
        protein_g=coerce_grams(body.protein, "protein"),
        carbs_g=coerce_grams(body.carbs, "carbs"),
        fats_g=coerce_grams(body.fats, "fats"),
        calories=coerce_float(body.calories, "calories"),
    )
    return presenters.ok(presenters.meal(entry), "Meal added to today")
