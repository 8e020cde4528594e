"""Unit conversions between metric and imperial measures."""

from enum import StrEnum

from fitness_tracker.domain.errors import UnitConversionError

LBS_PER_KG = 2.2046226218
IN_PER_CM = 0.3937007874
IN_PER_FT = 12.0


class Unit(StrEnum):
    """Units accepted for measurements and sets."""

    KG = "kg"
    LBS = "lbs"
    CM = "cm"
    IN = "in"
    FT = "ft"
    G = "g"
    ML = "ml"
    PERCENT = "%"


# Factors that map each unit onto a base unit of its dimension.
_TO_BASE: dict[Unit, tuple[str, float]] = {
    Unit.KG: ("mass", 1.0),
    Unit.LBS: ("mass", 1 / LBS_PER_KG),
    Unit.G: ("mass", 0.001),
    Unit.CM: ("length", 1.0),
    Unit.IN: ("length", 1 / IN_PER_CM),
    Unit.FT: ("length", IN_PER_FT / IN_PER_CM),
    Unit.ML: ("volume", 1.0),
    Unit.PERCENT: ("ratio", 1.0),
}

_UNIT_MAP: dict[str, tuple[Unit, Unit]] = {
    "Weight": (Unit.KG, Unit.LBS),
    "Height": (Unit.CM, Unit.FT),
    "Neck": (Unit.CM, Unit.IN),
    "Chest": (Unit.CM, Unit.IN),
    "Biceps": (Unit.CM, Unit.IN),
    "Waist": (Unit.CM, Unit.IN),
    "Hips": (Unit.CM, Unit.IN),
    "Thigh": (Unit.CM, Unit.IN),
    "Calf": (Unit.CM, Unit.IN),
    "BodyFat": (Unit.PERCENT, Unit.PERCENT),
}

MAX_INCHES_PART = 11

MEASUREMENT_TYPES = tuple(_UNIT_MAP)


def parse_unit(value: Unit | str) -> Unit:
    """Return the `Unit` for a unit name, rejecting unknown names."""
    try:
        return Unit(value)
    except ValueError as exc:
        raise UnitConversionError(f"Unknown unit: {value}") from exc


def convert(value: float, from_unit: Unit | str, to_unit: Unit | str) -> float:
    """Convert a value between two units of the same dimension."""
    source = parse_unit(from_unit)
    target = parse_unit(to_unit)
    if source == target:
        return value
    source_dimension, source_factor = _TO_BASE[source]
    target_dimension, target_factor = _TO_BASE[target]
    if source_dimension != target_dimension:
        raise UnitConversionError(f"Cannot convert {source} to {target}")
    return value * source_factor / target_factor


def split_feet_inches(cm: float) -> tuple[int, float]:
    """Split a height in centimetres into whole feet and remaining inches."""
    total_inches = cm * IN_PER_CM
    feet = int(total_inches // IN_PER_FT)
    inches = round(total_inches - feet * IN_PER_FT, 1)
    if inches >= IN_PER_FT:
        return feet + 1, 0.0
    return feet, inches


def join_feet_inches(feet: int, inches: int) -> float | None:
    """Return decimal feet for a feet and inches entry.

    Inches above 11 are capped. Returns None when the total is not positive.
    """
    capped = min(max(inches, 0), MAX_INCHES_PART)
    total_feet = max(feet, 0) + capped / IN_PER_FT
    if total_feet <= 0:
        return None
    return round(total_feet, 3)


def weight_unit(use_metric: bool) -> Unit:
    """Return the weight unit for a unit system preference."""
    return Unit.KG if use_metric else Unit.LBS


def measurement_unit(measurement_type: str, use_metric: bool) -> Unit:
    """Return the unit a measurement type is recorded in."""
    metric, imperial = _UNIT_MAP.get(measurement_type, (Unit.CM, Unit.IN))
    return metric if use_metric else imperial
