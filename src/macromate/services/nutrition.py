"""Barcode nutrition lookup backed by Open Food Facts."""

import logging
import re
from dataclasses import dataclass

from macromate.adapters.openfoodfacts_client import ProductClient
from macromate.domain.errors import (
    InsufficientDataError,
    NotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from macromate.domain.macros import BarcodeProduct, MacroRecord
from macromate.validation import BARCODE_PATTERN, round_half_up

DEFAULT_WEIGHT_G = 100.0
KJ_PER_KCAL = 4.184

_NUMBER = re.compile(r"([0-9]*\.?[0-9]+)")

_logger = logging.getLogger(__name__)


@dataclass
class NutritionLookupService:
    """Looks up packaged products and scales their macros to a weight."""

    product_client: ProductClient

    async def lookup_by_barcode(
        self, barcode: str, weight_g: float = DEFAULT_WEIGHT_G
    ) -> BarcodeProduct:
        """Return macros for a barcode scaled to ``weight_g`` grams."""
        code = parse_barcode(barcode)
        try:
            payload = await self.product_client.get_product(code)
        except Exception as exc:
            _logger.warning(
                "Open Food Facts lookup failed: %s", exc, extra={"barcode": code}
            )
            raise UpstreamUnavailableError(
                str(exc) or type(exc).__name__,
                error="Failed to reach Open Food Facts API",
            ) from exc

        product = payload.get("product")
        if payload.get("status") != 1 or not isinstance(product, dict):
            raise NotFoundError(
                f"No product for barcode {code}", error="Product not found"
            )

        nutriments = product.get("nutriments")
        macros = scale_nutriments(
            nutriments if isinstance(nutriments, dict) else {},
            weight_g,
            label=_product_name(product, code),
        )
        return BarcodeProduct(
            barcode=code,
            food_item=macros.parsed_food_item,
            weight_g=weight_g,
            macros=macros,
        )


def parse_barcode(raw: object) -> str:
    """Trim and validate a barcode of 6 to 14 digits."""
    code = str(raw).strip() if raw is not None else ""
    if not BARCODE_PATTERN.match(code):
        raise ValidationError(
            "Barcode must contain 6 to 14 digits", error="Invalid barcode format"
        )
    return code


def parse_weight(raw: object) -> float:
    """Extract a positive weight in grams, defaulting to 100g."""
    if isinstance(raw, bool):
        return DEFAULT_WEIGHT_G
    if isinstance(raw, int | float):
        return float(raw) if raw > 0 else DEFAULT_WEIGHT_G
    if isinstance(raw, str):
        match = _NUMBER.search(raw.replace(",", ".", 1))
        if match:
            value = float(match.group(1))
            if value > 0:
                return value
    return DEFAULT_WEIGHT_G


def scale_nutriments(
    nutriments: dict[str, object], weight_g: float, label: str = ""
) -> MacroRecord:
    """Scale per-100g nutriments to ``weight_g`` grams.

    Grams are rounded half-up to one decimal and calories to a whole number.
    Raises InsufficientDataError when every scaled value is zero.
    """
    protein = _first_number(nutriments, "proteins_100g", "proteins_serving")
    carbs = _first_number(nutriments, "carbohydrates_100g", "carbohydrates_serving")
    fats = _first_number(nutriments, "fat_100g", "fat_serving")
    calories = _first_number(
        nutriments, "energy-kcal_100g", "energy-kcal_serving", "energy_kcal"
    )
    if not calories:
        kilojoules = _first_number(
            nutriments, "energy-kj_100g", "energy-kj_serving", "energy_kj"
        )
        if kilojoules > 0:
            calories = kilojoules / KJ_PER_KCAL

    scale = weight_g / 100.0
    record = MacroRecord(
        protein_g=round_half_up(protein * scale, 1),
        carbs_g=round_half_up(carbs * scale, 1),
        fats_g=round_half_up(fats * scale, 1),
        calories=round_half_up(calories * scale, 0),
        parsed_food_item=label,
    )
    if record.is_empty and record.calories == 0:
        raise InsufficientDataError(
            "Insufficient nutrient data for this product",
            error="Insufficient nutrient data for this product",
        )
    return record


def _first_number(nutriments: dict[str, object], *keys: str) -> float:
    """Return the first present nutriment value as a float, else zero."""
    for key in keys:
        value = nutriments.get(key)
        if value is None:
            continue
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0.0
        return number if number == number else 0.0
    return 0.0


def _product_name(product: dict[str, object], barcode: str) -> str:
    """Build a 'brand - name' label for a product."""
    parts = [
        product.get("brand_owner") or product.get("brands"),
        product.get("product_name") or product.get("generic_name"),
    ]
    name = " - ".join(str(part) for part in parts if part)
    return name or f"Barcode {barcode}"
