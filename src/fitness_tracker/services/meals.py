"""Meal logging service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.aggregation import aggregate_meals, nutrient_progress
from fitness_tracker.domain.energy import round_half_up
from fitness_tracker.domain.errors import InvalidEntryError, NotFoundError
from fitness_tracker.domain.meals import (
    FoodItem,
    MealEntry,
    MealPortion,
    MealType,
    meal_portion,
)
from fitness_tracker.domain.models import NutritionTargets
from fitness_tracker.domain.stats import DailyMealTotals, NutrientProgress
from fitness_tracker.services.profiles import ProfileService


class MealRepository(Protocol):
    """Persistence interface for meal entries."""

    def create_meal_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        food_name: str,
        portion: MealPortion,
        meal_type: MealType | None,
    ) -> MealEntry:
        """Create a meal entry and return it."""

    def get_meal_entry(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal entry by id."""

    def list_meal_entries(self, user_id: UUID, day: date) -> list[MealEntry]:
        """Return a user's meal entries for a date, newest first."""

    def list_meal_entries_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealEntry]:
        """Return meal entries with start <= date < end."""

    def list_recent_meal_entries(self, user_id: UUID, limit: int) -> list[MealEntry]:
        """Return the most recently logged meal entries."""

    def delete_meal_entry(self, meal_id: UUID) -> None:
        """Delete a meal entry."""


@dataclass(frozen=True)
class DaySummary:
    """Totals for a day alongside the user's goals."""

    day: date
    totals: DailyMealTotals
    targets: NutritionTargets
    progress: dict[str, NutrientProgress]


@dataclass
class MealService:
    """Service that scales food nutrition and persists meal entries."""

    repository: MealRepository
    profile_service: ProfileService

    def log_food(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        food: FoodItem,
        servings: float | None = None,
        grams: float | None = None,
        meal_type: MealType | None = None,
    ) -> MealEntry:
        """Log a portion of a food by servings or grams."""
        portion = meal_portion(food, servings=servings, grams=grams)
        return self.repository.create_meal_entry(
            user_id=user_id,
            day=day,
            food_name=food.name or "Unknown Food",
            portion=portion,
            meal_type=meal_type,
        )

    def log_custom(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        name: str | None,
        calories: float,
        protein_g: float = 0.0,
        fats_g: float = 0.0,
        carbs_g: float = 0.0,
        meal_type: MealType | None = None,
    ) -> MealEntry:
        """Log a meal with hand-entered nutrition values."""
        values = (calories, protein_g, fats_g, carbs_g)
        if any(value < 0 for value in values):
            raise InvalidEntryError("Nutrition values cannot be negative")
        portion = MealPortion(
            servings=1.0,
            calories=round_half_up(calories),
            protein_g=round_half_up(protein_g),
            fats_g=round_half_up(fats_g),
            carbs_g=round_half_up(carbs_g),
        )
        return self.repository.create_meal_entry(
            user_id=user_id,
            day=day,
            food_name=(name or "").strip() or "Custom",
            portion=portion,
            meal_type=meal_type,
        )

    def list_meals(self, user_id: UUID, day: date) -> list[MealEntry]:
        return self.repository.list_meal_entries(user_id, day)

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete one of the user's meal entries."""
        entry = self.repository.get_meal_entry(meal_id)
        if entry is None or entry.user_id != user_id:
            raise NotFoundError(f"Meal entry {meal_id} not found")
        self.repository.delete_meal_entry(meal_id)

    def day_summary(self, user_id: UUID, day: date) -> DaySummary:
        """Return totals for a date with progress against the user's targets."""
        totals = aggregate_meals(self.repository.list_meal_entries(user_id, day))
        targets = self.profile_service.get_targets(user_id)
        return DaySummary(
            day=day,
            totals=totals,
            targets=targets,
            progress={
                "calories": nutrient_progress(
                    totals.total_calories, targets.calorie_goal
                ),
                "protein": nutrient_progress(
                    totals.total_protein, targets.protein_goal_g
                ),
                "fats": nutrient_progress(totals.total_fats, targets.fats_goal_g),
                "carbs": nutrient_progress(totals.total_carbs, targets.carbs_goal_g),
            },
        )
