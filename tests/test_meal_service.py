"""Tests for meal logging."""

from datetime import date
from uuid import uuid4

import pytest

from fitness_tracker.domain.errors import InvalidEntryError, NotFoundError
from fitness_tracker.domain.meals import (
    FoodItem,
    MealType,
    meal_portion,
    parse_serving_size,
)
from fitness_tracker.domain.models import BiometricProfile, Sex
from fitness_tracker.domain.stats import ProgressStatus
from fitness_tracker.services.meals import MealService
from fitness_tracker.services.profiles import ProfileService
from tests.conftest import InMemoryMealRepository

DAY = date(2026, 3, 2)

OATS = FoodItem(
    name="Oats",
    calories=389,
    protein_g=16.9,
    fats_g=6.9,
    carbs_g=66.3,
    serving_size=100,
)


def test_meal_portion_by_servings_and_grams() -> None:
    by_servings = meal_portion(OATS, servings=0.5)
    by_grams = meal_portion(OATS, grams=50)

    assert by_servings == by_grams
    assert by_servings.calories == 195
    assert by_servings.protein_g == 8


def test_meal_portion_floors_servings() -> None:
    portion = meal_portion(OATS, servings=0)

    assert portion.servings == 0.01
    assert portion.calories == 4


def test_meal_portion_rejects_ambiguous_input() -> None:
    with pytest.raises(InvalidEntryError):
        meal_portion(OATS, servings=1, grams=100)
    with pytest.raises(InvalidEntryError):
        meal_portion(OATS, grams=0)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(30, 30.0), ("100 g", 100.0), ("42,5g", 42.5), (None, 100.0), ("a cup", 100.0)],
)
def test_parse_serving_size(raw: object, expected: float) -> None:
    assert parse_serving_size(raw) == expected


def test_log_food_and_summary(
    meal_repository: InMemoryMealRepository, profile_service: ProfileService
) -> None:
    user_id = uuid4()
    service = MealService(meal_repository, profile_service)

    entry = service.log_food(user_id, DAY, OATS, grams=200, meal_type=MealType.BREAKFAST)
    service.log_custom(user_id, DAY, "  ", calories=1800, protein_g=40)
    summary = service.day_summary(user_id, DAY)

    assert entry.calories == 778
    assert service.list_meals(user_id, DAY)[0].food_name == "Custom"
    assert summary.totals.total_calories == 2578
    assert summary.targets.calorie_goal == 2000
    assert summary.progress["calories"].status is ProgressStatus.EXCEEDED
    assert summary.progress["calories"].overage_percent == 29
    assert summary.progress["protein"].status is ProgressStatus.BELOW


def test_summary_uses_profile_targets(
    meal_repository: InMemoryMealRepository, profile_service: ProfileService
) -> None:
    user_id = uuid4()
    profile_service.save_profile(
        user_id,
        BiometricProfile(age=25, weight_kg=60, height_cm=165, sex=Sex.FEMALE),
    )
    service = MealService(meal_repository, profile_service)
    service.log_custom(user_id, DAY, "Dinner", calories=2000)

    summary = service.day_summary(user_id, DAY)

    assert summary.targets.calorie_goal == 2085
    assert summary.progress["calories"].status is ProgressStatus.ON_TARGET


def test_empty_day_summary(
    meal_repository: InMemoryMealRepository, profile_service: ProfileService
) -> None:
    service = MealService(meal_repository, profile_service)

    summary = service.day_summary(uuid4(), DAY)

    assert summary.totals.meal_count == 0
    assert summary.progress["carbs"].consumed == 0


def test_log_custom_rejects_negative_values(
    meal_repository: InMemoryMealRepository, profile_service: ProfileService
) -> None:
    service = MealService(meal_repository, profile_service)

    with pytest.raises(InvalidEntryError):
        service.log_custom(uuid4(), DAY, "Bad", calories=-5)


def test_delete_meal_checks_owner(
    meal_repository: InMemoryMealRepository, profile_service: ProfileService
) -> None:
    owner = uuid4()
    service = MealService(meal_repository, profile_service)
    entry = service.log_custom(owner, DAY, "Snack", calories=150)

    with pytest.raises(NotFoundError):
        service.delete_meal(uuid4(), entry.id)

    service.delete_meal(owner, entry.id)
    assert service.list_meals(owner, DAY) == []
