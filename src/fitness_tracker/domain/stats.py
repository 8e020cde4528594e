"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class ProgressStatus(StrEnum):
    """How consumption compares with its goal."""

    BELOW = "below"
    ON_TARGET = "on_target"
    EXCEEDED = "exceeded"


@dataclass(frozen=True)
class DailyMealTotals:
    """Summed nutrition for the meals of one day."""

    total_calories: float = 0.0
    total_protein: float = 0.0
    total_fats: float = 0.0
    total_carbs: float = 0.0
    meal_count: int = 0


@dataclass(frozen=True)
class NutrientProgress:
    """Consumption of one nutrient against its goal."""

    consumed: float
    goal: float
    status: ProgressStatus
    overage_percent: int | None


@dataclass(frozen=True)
class CardioTotals:
    """Summed cardio activity for a day."""

    calories_burned: int = 0
    duration_minutes: int = 0
    activity_count: int = 0


@dataclass(frozen=True)
class DailyTotals:
    """Daily total macros."""

    day: date
    calories: float
    protein_g: float
    fats_g: float
    carbs_g: float


@dataclass
class PeriodSummary:
    """Aggregated totals for a period."""

    daily: list[DailyTotals]
    avg_calories: float
    avg_protein_g: float
    avg_fats_g: float
    avg_carbs_g: float
