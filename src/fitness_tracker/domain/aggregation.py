"""Aggregation of logged meals, cardio and sets into totals."""

import math
from collections.abc import Iterable

from fitness_tracker.domain.cardio import CardioActivity
from fitness_tracker.domain.energy import round_half_up
from fitness_tracker.domain.meals import MealEntry
from fitness_tracker.domain.stats import (
    CardioTotals,
    DailyMealTotals,
    NutrientProgress,
    ProgressStatus,
)
from fitness_tracker.domain.workouts import ExerciseSet, ExerciseStats

ON_TARGET_LOWER = 0.9
ON_TARGET_UPPER = 1.2
OVERAGE_THRESHOLD = 1.1


def aggregate_meals(entries: Iterable[MealEntry]) -> DailyMealTotals:
    """Sum the nutrition of a day's meals.

    fsum keeps the result independent of input order.
    """
    meals = list(entries)
    if not meals:
        return DailyMealTotals()
    return DailyMealTotals(
        total_calories=math.fsum(meal.calories for meal in meals),
        total_protein=math.fsum(meal.protein_g for meal in meals),
        total_fats=math.fsum(meal.fats_g for meal in meals),
        total_carbs=math.fsum(meal.carbs_g for meal in meals),
        meal_count=len(meals),
    )


def classify_progress(consumed: float, goal: float) -> ProgressStatus:
    """Classify a consumed/goal ratio for display."""
    if goal <= 0:
        return ProgressStatus.BELOW
    ratio = consumed / goal
    if ratio < ON_TARGET_LOWER:
        return ProgressStatus.BELOW
    if ratio <= ON_TARGET_UPPER:
        return ProgressStatus.ON_TARGET
    return ProgressStatus.EXCEEDED


def overage_percent(consumed: float, goal: float) -> int | None:
    """Percent over goal, reported once consumption passes 110% of it."""
    if goal <= 0 or consumed <= goal * OVERAGE_THRESHOLD:
        return None
    return round_half_up((consumed - goal) / goal * 100)


def nutrient_progress(consumed: float, goal: float) -> NutrientProgress:
    return NutrientProgress(
        consumed=consumed,
        goal=goal,
        status=classify_progress(consumed, goal),
        overage_percent=overage_percent(consumed, goal),
    )


def aggregate_cardio(activities: Iterable[CardioActivity]) -> CardioTotals:
    """Sum calories and minutes over logged cardio activities."""
    calories = 0
    minutes = 0
    count = 0
    for activity in activities:
        calories += activity.calories_burned
        minutes += activity.duration_minutes
        count += 1
    return CardioTotals(
        calories_burned=calories, duration_minutes=minutes, activity_count=count
    )


def session_volume(sets: Iterable[ExerciseSet]) -> float:
    """Total weight x reps over completed working sets."""
    return math.fsum(
        item.weight * item.reps
        for item in sets
        if item.is_completed and not item.is_warmup and item.weight and item.reps
    )


def exercise_stats(exercise_id: str, sets: Iterable[ExerciseSet]) -> ExerciseStats:
    """Lifetime statistics over an exercise's completed sets."""
    completed = [item for item in sets if item.is_completed]
    if not completed:
        return ExerciseStats(
            exercise_id=exercise_id,
            max_weight=0.0,
            total_volume=0.0,
            total_sets=0,
            average_reps=0,
        )
    return ExerciseStats(
        exercise_id=exercise_id,
        max_weight=max(item.weight for item in completed),
        total_volume=math.fsum(item.weight * item.reps for item in completed),
        total_sets=len(completed),
        average_reps=round_half_up(
            sum(item.reps for item in completed) / len(completed)
        ),
    )
