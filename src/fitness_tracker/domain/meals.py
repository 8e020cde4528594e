"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from fitness_tracker.domain.energy import round_half_up
from fitness_tracker.domain.errors import InvalidEntryError

MIN_SERVINGS = 0.01
DEFAULT_SERVING_SIZE = 100.0


class MealType(StrEnum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodItem:
    """Nutrition values for one serving of a food."""

    name: str
    calories: float
    protein_g: float
    fats_g: float
    carbs_g: float
    serving_size: float = DEFAULT_SERVING_SIZE
    serving_unit: str = "g"
    barcode: str | None = None
    brand: str | None = None


@dataclass(frozen=True)
class MealPortion:
    """Rounded nutrition values for the portion actually eaten."""

    servings: float
    calories: int
    protein_g: int
    fats_g: int
    carbs_g: int


@dataclass(frozen=True)
class MealEntry:
    """A logged meal for a calendar date."""

    id: UUID
    user_id: UUID
    date: date
    food_name: str
    servings: float
    calories: float
    protein_g: float
    fats_g: float
    carbs_g: float
    meal_type: MealType | None = None
    created_at: datetime | None = None


def meal_portion(
    food: FoodItem, servings: float | None = None, grams: float | None = None
) -> MealPortion:
    """Scale a food's nutrition by servings or by grams eaten.

    Servings are floored at 0.01. Grams are divided by the food's serving
    size, which falls back to 100 when not positive.
    """
    if servings is not None and grams is not None:
        raise InvalidEntryError("Provide servings or grams, not both")
    if grams is not None:
        if grams <= 0:
            raise InvalidEntryError("Grams must be positive")
        serving_size = (
            food.serving_size if food.serving_size > 0 else DEFAULT_SERVING_SIZE
        )
        multiplier = grams / serving_size
    else:
        multiplier = max(MIN_SERVINGS, servings if servings is not None else 1.0)
    return MealPortion(
        servings=multiplier,
        calories=round_half_up(food.calories * multiplier),
        protein_g=round_half_up(food.protein_g * multiplier),
        fats_g=round_half_up(food.fats_g * multiplier),
        carbs_g=round_half_up(food.carbs_g * multiplier),
    )


def parse_serving_size(value: object) -> float:
    """Extract a numeric serving size from values like "100 g" or "100,0"."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    if value is None:
        return DEFAULT_SERVING_SIZE
    cleaned = "".join(
        char for char in str(value).replace(",", ".") if char.isdigit() or char in ".-"
    )
    try:
        return float(cleaned)
    except ValueError:
        return DEFAULT_SERVING_SIZE
