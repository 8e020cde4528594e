"""Energy expenditure estimates: BMR, TDEE, calorie targets and cardio burn."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from fitness_tracker.domain.errors import MissingInputError
from fitness_tracker.domain.models import (
    BiometricProfile,
    Goal,
    GoalSpeed,
    Sex,
)

DEFAULT_ACTIVITY_FACTOR = 1.55
DEFAULT_WEIGHT_KG = 70.0
DEFAULT_AGE = 30
DEFAULT_MET = 6.0
MAX_HEART_RATE_BASE = 220


def _default_adjustments() -> dict[str, dict[str, int]]:
    return {
        Goal.LOSE: {
            GoalSpeed.SLOW: -250,
            GoalSpeed.MODERATE: -500,
            GoalSpeed.FAST: -750,
        },
        Goal.MAINTAIN: {
            GoalSpeed.SLOW: 0,
            GoalSpeed.MODERATE: 0,
            GoalSpeed.FAST: 0,
        },
        Goal.GAIN: {
            GoalSpeed.SLOW: 200,
            GoalSpeed.MODERATE: 300,
            GoalSpeed.FAST: 500,
        },
    }


@dataclass(frozen=True)
class EnergyConfig:
    """Constants for the calorie target formula."""

    activity_factor: float = DEFAULT_ACTIVITY_FACTOR
    adjustments: Mapping[str, Mapping[str, int]] = field(
        default_factory=_default_adjustments
    )

    def goal_adjustment(self, goal: Goal | str, speed: GoalSpeed | str) -> int:
        """Return the kcal/day delta for a goal and speed."""
        return int(self.adjustments.get(str(goal), {}).get(str(speed), 0))


MET_VALUES: dict[str, float] = {
    "running": 9.8,
    "cycling": 7.5,
    "swimming": 7.0,
    "walking": 4.5,
    "rowing": 6.0,
    "elliptical": 5.0,
    "stairmaster": 9.0,
    "jump_rope": 12.0,
    "hiking": 6.0,
    "boxing": 9.0,
    "dancing": 5.5,
    "yoga": 3.0,
    "pilates": 4.0,
    "aerobics": 7.0,
    "spinning": 8.5,
    "basketball": 8.0,
    "soccer": 10.0,
    "tennis": 7.5,
    "kickboxing": 10.0,
    "crossfit": 8.0,
    "other": 6.0,
}


@dataclass(frozen=True)
class CardioActivityType:
    """Catalogue entry for a loggable cardio activity."""

    id: str
    name: str
    has_distance: bool


CARDIO_ACTIVITIES: tuple[CardioActivityType, ...] = (
    CardioActivityType("running", "Running", True),
    CardioActivityType("cycling", "Cycling", True),
    CardioActivityType("swimming", "Swimming", True),
    CardioActivityType("walking", "Walking", True),
    CardioActivityType("rowing", "Rowing", True),
    CardioActivityType("elliptical", "Elliptical", False),
    CardioActivityType("stairmaster", "Stair Master", False),
    CardioActivityType("jump_rope", "Jump Rope", False),
    CardioActivityType("hiking", "Hiking", True),
    CardioActivityType("boxing", "Boxing", False),
    CardioActivityType("dancing", "Dancing", False),
    CardioActivityType("yoga", "Yoga", False),
    CardioActivityType("pilates", "Pilates", False),
    CardioActivityType("aerobics", "Aerobics", False),
    CardioActivityType("spinning", "Spinning", False),
    CardioActivityType("basketball", "Basketball", False),
    CardioActivityType("soccer", "Soccer", False),
    CardioActivityType("tennis", "Tennis", False),
    CardioActivityType("kickboxing", "Kickboxing", False),
    CardioActivityType("crossfit", "CrossFit", False),
    CardioActivityType("other", "Other Cardio", False),
)

# (speed above, multiplier) checked in order, then (speed below, multiplier).
_SPEED_BANDS: dict[str, tuple[list[tuple[float, float]], tuple[float, float]]] = {
    "running": ([(15, 1.3), (12, 1.2), (9, 1.1)], (6, 0.9)),
    "cycling": ([(30, 1.3), (25, 1.2), (20, 1.1)], (15, 0.9)),
    "swimming": ([(3, 1.3), (2, 1.1)], (1.5, 0.9)),
    "walking": ([(6, 1.2), (5, 1.1)], (4, 0.9)),
    "rowing": ([(5, 1.2)], (3, 0.9)),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def profile_from_row(row: Mapping[str, object]) -> BiometricProfile:
    """Build a profile from a stored row.

    Raises MissingInputError when age, weight, height or sex are absent,
    non-numeric or not positive.
    """
    missing: list[str] = []
    age = _positive_number(row.get("age"))
    weight = _positive_number(row.get("weight"))
    height = _positive_number(row.get("height"))
    if age is None:
        missing.append("age")
    if weight is None:
        missing.append("weight")
    if height is None:
        missing.append("height")
    sex_raw = str(row.get("sex") or "").lower()
    if sex_raw not in {Sex.MALE, Sex.FEMALE}:
        missing.append("sex")
    if missing:
        raise MissingInputError(missing)

    goal_raw = str(row.get("goal") or Goal.MAINTAIN).lower()
    speed_raw = str(row.get("goal_speed") or GoalSpeed.MODERATE).lower()
    override = _positive_number(row.get("calorie_goal_override"))
    return BiometricProfile(
        age=age,
        weight_kg=weight,
        height_cm=height,
        sex=Sex(sex_raw),
        goal=Goal(goal_raw) if goal_raw in set(Goal) else Goal.MAINTAIN,
        goal_speed=(
            GoalSpeed(speed_raw) if speed_raw in set(GoalSpeed) else GoalSpeed.MODERATE
        ),
        calorie_goal_override=round_half_up(override) if override else None,
    )


def bmr(profile: BiometricProfile) -> float:
    """Basal metabolic rate using the Mifflin-St Jeor equation."""
    sex_offset = 5 if profile.sex == Sex.MALE else -161
    return (
        10 * profile.weight_kg
        + 6.25 * profile.height_cm
        - 5 * profile.age
        + sex_offset
    )


def tdee(profile: BiometricProfile, config: EnergyConfig) -> float:
    """Total daily energy expenditure."""
    return bmr(profile) * config.activity_factor


def calorie_target(
    profile: BiometricProfile | None, config: EnergyConfig | None = None
) -> int | None:
    """Return the goal-adjusted daily calorie target.

    None means the target is undeterminable and the caller should fall back
    to a default.
    """
    if profile is None or not _is_complete(profile):
        return None
    resolved = config or EnergyConfig()
    target = tdee(profile, resolved) + resolved.goal_adjustment(
        profile.goal, profile.goal_speed
    )
    return round_half_up(target)


def heart_rate_multiplier(avg_heart_rate: float | None, age: float) -> float:
    """MET multiplier for the heart-rate zone of an activity."""
    if not avg_heart_rate or avg_heart_rate <= 0:
        return 1.0
    max_heart_rate = MAX_HEART_RATE_BASE - age
    if max_heart_rate <= 0:
        return 1.0
    percentage = avg_heart_rate / max_heart_rate * 100
    if percentage > 90:
        return 1.3
    if percentage > 80:
        return 1.2
    if percentage > 70:
        return 1.1
    if percentage < 50:
        return 0.8
    return 1.0


def speed_multiplier(
    activity_type: str, distance_km: float | None, duration_minutes: float
) -> float:
    """MET multiplier derived from average speed for distance activities."""
    if not distance_km or distance_km <= 0 or duration_minutes <= 0:
        return 1.0
    bands = _SPEED_BANDS.get(activity_type)
    if bands is None:
        return 1.0
    speed = distance_km / (duration_minutes / 60)
    upper, lower = bands
    for threshold, multiplier in upper:
        if speed > threshold:
            return multiplier
    if speed < lower[0]:
        return lower[1]
    return 1.0


def estimate_activity_calories(  # noqa: PLR0913
    activity_type: str,
    duration_minutes: float,
    *,
    weight_kg: float | None = None,
    age: float | None = None,
    distance_km: float | None = None,
    avg_heart_rate: float | None = None,
) -> int:
    """Estimate calories burned for a cardio activity from MET tables."""
    if duration_minutes <= 0:
        return 0
    weight = weight_kg if weight_kg and weight_kg > 0 else DEFAULT_WEIGHT_KG
    resolved_age = age if age and age > 0 else DEFAULT_AGE
    met = MET_VALUES.get(activity_type, DEFAULT_MET)
    met *= heart_rate_multiplier(avg_heart_rate, resolved_age)
    met *= speed_multiplier(activity_type, distance_km, duration_minutes)
    return round_half_up(met * weight * (duration_minutes / 60))


def hourly_estimate(activity_type: str, weight_kg: float | None = None) -> int:
    """Calories for sixty minutes of an activity, used for previews."""
    return estimate_activity_calories(activity_type, 60, weight_kg=weight_kg)


def _is_complete(profile: BiometricProfile) -> bool:
    values = (profile.age, profile.weight_kg, profile.height_cm)
    if not all(_positive_number(value) is not None for value in values):
        return False
    return str(profile.sex) in {Sex.MALE, Sex.FEMALE}


def _positive_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number
