"""Pydantic models for API request payloads."""

from datetime import date as Date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from fitness_tracker.domain.meals import (
    DEFAULT_SERVING_SIZE,
    FoodItem,
    MealType,
    parse_serving_size,
)
from fitness_tracker.domain.models import BiometricProfile, Goal, GoalSpeed, Sex
from fitness_tracker.domain.workouts import (
    DEFAULT_TEMPLATE_REPS,
    DEFAULT_TEMPLATE_SETS,
    TemplateExercise,
)


class ProfilePayload(BaseModel):
    """Biometric profile entered during setup."""

    age: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    sex: Sex
    goal: Goal = Goal.MAINTAIN
    goal_speed: GoalSpeed = GoalSpeed.MODERATE
    calorie_goal_override: int | None = Field(default=None, gt=0)

    def to_domain(self) -> BiometricProfile:
        return BiometricProfile(**self.model_dump())


class TargetsPayload(BaseModel):
    """Possibly incomplete biometrics for a stateless target calculation."""

    age: float | None = None
    weight: float | None = None
    height: float | None = None
    sex: str | None = None
    goal: str | None = None
    goal_speed: str | None = None
    calorie_goal_override: int | None = None


class FoodPayload(BaseModel):
    """Nutrition values for one serving of a food."""

    name: str
    calories: float = Field(ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    fats_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    serving_size: float = DEFAULT_SERVING_SIZE
    serving_unit: str = "g"
    barcode: str | None = None
    brand: str | None = None

    @field_validator("serving_size", mode="before")
    @classmethod
    def normalize_serving_size(cls, value: object) -> float:
        return parse_serving_size(value)

    def to_domain(self) -> FoodItem:
        return FoodItem(**self.model_dump())


class MealPayload(BaseModel):
    """A food logged by servings or by grams."""

    date: Date
    food: FoodPayload
    servings: float | None = None
    grams: float | None = None
    meal_type: MealType | None = None


class CustomMealPayload(BaseModel):
    """A meal with hand-entered nutrition values."""

    date: Date
    name: str | None = None
    calories: float
    protein_g: float = 0.0
    fats_g: float = 0.0
    carbs_g: float = 0.0
    meal_type: MealType | None = None


class CardioPayload(BaseModel):
    """A cardio activity to log."""

    date: Date
    activity_type: str
    duration_minutes: int
    distance_km: float | None = None
    avg_heart_rate: int | None = None
    notes: str | None = None
    manual_calories: int | None = None


class CardioEstimatePayload(BaseModel):
    """Inputs for a stateless calorie burn estimate."""

    activity_type: str
    duration_minutes: float
    weight_kg: float | None = None
    age: float | None = None
    distance_km: float | None = None
    avg_heart_rate: float | None = None


class StartWorkoutPayload(BaseModel):
    workout_name: str = ""
    template_id: UUID | None = None


class ExercisePayload(BaseModel):
    exercise_id: str
    exercise_name: str
    reps: int = Field(default=DEFAULT_TEMPLATE_REPS, ge=0)


class SetUpdatePayload(BaseModel):
    """Fields of a set edited in place; omitted fields are left unchanged."""

    reps: int | None = None
    weight: float | None = None
    weight_unit: str | None = None
    is_warmup: bool | None = None
    is_completed: bool | None = None


class TemplateExercisePayload(BaseModel):
    exercise_id: str
    exercise_name: str
    sets: int = DEFAULT_TEMPLATE_SETS
    reps: int | list[int] = DEFAULT_TEMPLATE_REPS

    def to_domain(self) -> TemplateExercise:
        return TemplateExercise(**self.model_dump())


class TemplatePayload(BaseModel):
    name: str
    exercises: list[TemplateExercisePayload]


class MeasurementPayload(BaseModel):
    type: str
    value: float
    unit: str | None = None


class HeightPayload(BaseModel):
    feet: int
    inches: int = 0


class SettingsPayload(BaseModel):
    use_metric_units: bool | None = None
    timezone: str | None = None
