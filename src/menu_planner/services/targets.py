"""Daily calorie and macro target calculation."""

import math
import re

from menu_planner.domain.targets import (
    ActivityLevel,
    Goal,
    MacroTargets,
    Profile,
    Targets,
)

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

GOAL_ADJUSTMENTS: dict[Goal, float] = {
    Goal.LOSE: -500.0,
    Goal.MAINTAIN: 0.0,
    Goal.GAIN: 300.0,
}

PROTEIN_SHARE = 0.3
CARBS_SHARE = 0.4
FATS_SHARE = 0.3
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def compute_targets(profile: Profile) -> Targets | None:
    """Compute BMI, BMR, TDEE and daily targets, or None for an invalid profile."""
    age = parse_positive_int(profile.age)
    height = parse_positive_int(profile.height)
    weight = parse_positive_int(profile.weight)
    if age is None or height is None or weight is None:
        return None
    try:
        activity = ActivityLevel(profile.activity_level)
    except ValueError:
        return None

    height_m = height / 100
    bmi = weight / (height_m * height_m)
    bmr = mifflin_st_jeor(profile.gender, age, height, weight)
    tdee = bmr * ACTIVITY_MULTIPLIERS[activity]
    daily_calories = tdee + GOAL_ADJUSTMENTS.get(_parse_goal(profile.goal), 0.0)

    return Targets(
        bmi=bmi,
        bmr=bmr,
        tdee=tdee,
        daily_calories=daily_calories,
        macros=macro_split(daily_calories),
    )


def mifflin_st_jeor(gender: str, age: int, height_cm: int, weight_kg: int) -> float:
    """Basal metabolic rate in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        return base + 5
    return base - 161


def macro_split(daily_calories: float) -> MacroTargets:
    """Split a calorie target into protein/carbs/fats grams."""
    return MacroTargets(
        protein=_round_half_up(daily_calories * PROTEIN_SHARE / KCAL_PER_GRAM_PROTEIN),
        carbs=_round_half_up(daily_calories * CARBS_SHARE / KCAL_PER_GRAM_CARBS),
        fats=_round_half_up(daily_calories * FATS_SHARE / KCAL_PER_GRAM_FAT),
    )


def parse_positive_int(value: object) -> int | None:
    """Parse the leading integer of a form value; None unless it is positive."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        parsed = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return None
        parsed = int(match.group(1))
    else:
        return None
    return parsed if parsed > 0 else None


def _parse_goal(value: str) -> Goal:
    try:
        return Goal(value)
    except ValueError:
        return Goal.MAINTAIN


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
