"""Domain models for macro records, meal logs and favorites."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class MacroRecord:
    """Normalized macronutrient values for a single food item."""

    protein_g: float
    carbs_g: float
    fats_g: float
    calories: float
    parsed_food_item: str

    @classmethod
    def empty(cls, label: str) -> "MacroRecord":
        """Return the zero-valued record used when extraction fails."""
        return cls(
            protein_g=0, carbs_g=0, fats_g=0, calories=0, parsed_food_item=label
        )

    @property
    def is_empty(self) -> bool:
        """True when no macronutrients could be determined."""
        return self.protein_g == 0 and self.carbs_g == 0 and self.fats_g == 0


@dataclass(frozen=True)
class MealLogEntry:
    """A single logged meal row."""

    id: str
    user_id: str
    log_date: date
    meal_time: datetime
    food_item: str
    protein_g: float
    carbs_g: float
    fats_g: float
    calories: float


@dataclass(frozen=True)
class FavoriteFoodItem:
    """A food saved to a user's favorites."""

    id: str
    user_id: str
    food_item: str
    protein_g: float
    carbs_g: float
    fats_g: float
    calories: float
    created_at: datetime | None


@dataclass(frozen=True)
class DailySummary:
    """Macro totals for one calendar day."""

    date: date
    total_protein: float
    total_carbs: float
    total_fats: float
    total_calories: float


@dataclass(frozen=True)
class BarcodeProduct:
    """Macros for a scanned product scaled to the requested weight."""

    barcode: str
    food_item: str
    weight_g: float
    macros: MacroRecord
