"""JSON payload builders for API responses."""

from fastapi.responses import JSONResponse

from macromate.domain.macros import (
    BarcodeProduct,
    DailySummary,
    FavoriteFoodItem,
    MacroRecord,
    MealLogEntry,
)


def ok(data: object = None, message: str | None = None) -> dict[str, object]:
    """Wrap a successful result in the response envelope."""
    payload: dict[str, object] = {"success": True}
    if data is not None:
        payload["data"] = data
    if message is not None:
        payload["message"] = message
    return payload


def error_response(
    status_code: int, error: str, message: str | None = None, **extra: object
) -> JSONResponse:
    """Build a failed response envelope."""
    content: dict[str, object] = {"success": False, "error": error}
    if message is not None:
        content["message"] = message
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def calculated_meal(macros: MacroRecord, entry: MealLogEntry) -> dict[str, object]:
    """Extracted macros plus the identifiers of the saved log row."""
    return {
        "protein_g": macros.protein_g,
        "carbs_g": macros.carbs_g,
        "fats_g": macros.fats_g,
        "calories": macros.calories,
        "parsed_food_item": macros.parsed_food_item,
        "id": entry.id,
        "date": entry.log_date.isoformat(),
        "mealTime": entry.meal_time.isoformat(),
    }


def meal(entry: MealLogEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "foodItem": entry.food_item,
        "protein": entry.protein_g,
        "carbs": entry.carbs_g,
        "fats": entry.fats_g,
        "calories": entry.calories,
        "mealTime": entry.meal_time.isoformat(),
        "date": entry.log_date.isoformat(),
    }


def barcode_meal(product: BarcodeProduct, entry: MealLogEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "barcode": product.barcode,
        "foodItem": product.food_item,
        "weight": product.weight_g,
        "protein": product.macros.protein_g,
        "carbs": product.macros.carbs_g,
        "fats": product.macros.fats_g,
        "calories": product.macros.calories,
        "date": entry.log_date.isoformat(),
        "mealTime": entry.meal_time.isoformat(),
    }


def day(summary: DailySummary, entries: list[MealLogEntry]) -> dict[str, object]:
    return {
        "date": summary.date.isoformat(),
        "totalMacros": {
            "protein": summary.total_protein,
            "carbs": summary.total_carbs,
            "fats": summary.total_fats,
            "calories": summary.total_calories,
        },
        "meals": [meal(entry) for entry in entries],
    }


def daily_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "date": summary.date.isoformat(),
        "totalProtein": summary.total_protein,
        "totalCarbs": summary.total_carbs,
        "totalFats": summary.total_fats,
        "totalCalories": summary.total_calories,
    }


def favorite(item: FavoriteFoodItem) -> dict[str, object]:
    return {
        "id": item.id,
        "foodItem": item.food_item,
        "protein": item.protein_g,
        "carbs": item.carbs_g,
        "fats": item.fats_g,
        "calories": item.calories,
        "createdAt": item.created_at.isoformat() if item.created_at else None,
    }
