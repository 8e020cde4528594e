"""Macro allocation for a daily calorie target."""

from dataclasses import dataclass

from fitness_tracker.domain.energy import EnergyConfig, calorie_target, round_half_up
from fitness_tracker.domain.models import BiometricProfile, NutritionTargets

PROTEIN_SHARE = 0.3
FAT_SHARE = 0.3
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_FAT = 9
KCAL_PER_G_CARBS = 4

DEFAULT_TARGETS = NutritionTargets(
    calorie_goal=2000,
    protein_goal_g=150,
    fats_goal_g=65,
    carbs_goal_g=250,
)


@dataclass(frozen=True)
class MacroSplit:
    """Gram targets per macronutrient."""

    protein_g: int
    fats_g: int
    carbs_g: int


def allocate_macros(calorie_goal: float) -> MacroSplit:
    """Split a calorie target 30/30/40 into protein, fat and carb grams.

    Carbs take the calories left after rounded protein and fat, so the split
    re-adds to within 2 kcal of the target.
    """
    protein_g = round_half_up(calorie_goal * PROTEIN_SHARE / KCAL_PER_G_PROTEIN)
    fats_g = round_half_up(calorie_goal * FAT_SHARE / KCAL_PER_G_FAT)
    remaining = (
        calorie_goal - protein_g * KCAL_PER_G_PROTEIN - fats_g * KCAL_PER_G_FAT
    )
    return MacroSplit(
        protein_g=protein_g,
        fats_g=fats_g,
        carbs_g=max(round_half_up(remaining / KCAL_PER_G_CARBS), 0),
    )


def targets_for_calories(calorie_goal: int) -> NutritionTargets:
    split = allocate_macros(calorie_goal)
    return NutritionTargets(
        calorie_goal=calorie_goal,
        protein_goal_g=split.protein_g,
        fats_goal_g=split.fats_g,
        carbs_goal_g=split.carbs_g,
    )


def nutrition_targets(
    profile: BiometricProfile | None,
    config: EnergyConfig | None = None,
    default: NutritionTargets = DEFAULT_TARGETS,
) -> NutritionTargets:
    """Derive nutrition targets, falling back to defaults when undeterminable."""
    if profile is not None and profile.calorie_goal_override:
        return targets_for_calories(profile.calorie_goal_override)
    calories = calorie_target(profile, config)
    if calories is None or calories <= 0:
        return default
    return targets_for_calories(calories)


def default_targets(calorie_goal: int = DEFAULT_TARGETS.calorie_goal) -> NutritionTargets:
    """Targets used when a profile cannot produce its own.

    A configured calorie goal other than the stock one gets a 30/30/40 split.
    """
    if calorie_goal == DEFAULT_TARGETS.calorie_goal:
        return DEFAULT_TARGETS
    return targets_for_calories(calorie_goal)
