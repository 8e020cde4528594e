"""Domain models for user profiles and nutrition targets."""

from dataclasses import dataclass
from enum import StrEnum


class Sex(StrEnum):
    MALE = "male"
    FEMALE = "female"


class Goal(StrEnum):
    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class GoalSpeed(StrEnum):
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"


@dataclass(frozen=True)
class BiometricProfile:
    """Biometrics entered by the user on the settings form."""

    age: float
    weight_kg: float
    height_cm: float
    sex: Sex
    goal: Goal = Goal.MAINTAIN
    goal_speed: GoalSpeed = GoalSpeed.MODERATE
    calorie_goal_override: int | None = None


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macronutrient goals."""

    calorie_goal: int
    protein_goal_g: int
    fats_goal_g: int
    carbs_goal_g: int
