"""Tests for target calculation."""

import pytest

from menu_planner.domain.targets import Profile
from menu_planner.services.targets import (
    compute_targets,
    macro_split,
    mifflin_st_jeor,
    parse_positive_int,
)


def _profile(**overrides: str) -> Profile:
    values = {
        "age": "25",
        "gender": "male",
        "height": "180",
        "weight": "75",
        "activity_level": "moderate",
        "goal": "maintain",
    }
    values.update(overrides)
    return Profile(**values)


def test_compute_targets_for_reference_profile() -> None:
    targets = compute_targets(_profile())

    assert targets is not None
    assert targets.bmi == pytest.approx(75 / 1.8**2)
    assert targets.bmi == pytest.approx(23.15, abs=0.01)
    assert targets.bmr == 1755.0
    assert targets.tdee == pytest.approx(2720.25)
    assert targets.daily_calories == pytest.approx(2720.25)
    assert targets.macros.protein == 204
    assert targets.macros.carbs == 272
    assert targets.macros.fats == 91


def test_goal_adjusts_daily_calories() -> None:
    lose = compute_targets(_profile(goal="lose"))
    gain = compute_targets(_profile(goal="gain"))

    assert lose is not None
    assert gain is not None
    assert lose.daily_calories == pytest.approx(2220.25)
    assert gain.daily_calories == pytest.approx(3020.25)
    assert lose.tdee == gain.tdee


def test_unknown_goal_is_treated_as_maintain() -> None:
    targets = compute_targets(_profile(goal="bulk"))

    assert targets is not None
    assert targets.daily_calories == pytest.approx(targets.tdee)


def test_non_male_uses_female_constant() -> None:
    assert mifflin_st_jeor("other", 25, 180, 75) == 1589
    assert mifflin_st_jeor("male", 25, 180, 75) == 1755


@pytest.mark.parametrize(
    ("level", "multiplier"),
    [
        ("sedentary", 1.2),
        ("light", 1.375),
        ("moderate", 1.55),
        ("active", 1.725),
        ("veryActive", 1.9),
    ],
)
def test_activity_multipliers(level: str, multiplier: float) -> None:
    targets = compute_targets(_profile(activity_level=level))

    assert targets is not None
    assert targets.tdee == pytest.approx(1755 * multiplier)


@pytest.mark.parametrize(
    "overrides",
    [
        {"age": "0"},
        {"weight": "-5"},
        {"height": "tall"},
        {"age": ""},
        {"activity_level": "extreme"},
    ],
)
def test_invalid_profile_returns_none(overrides: dict[str, str]) -> None:
    assert compute_targets(_profile(**overrides)) is None


def test_leading_integer_is_parsed_from_form_values() -> None:
    assert parse_positive_int("180cm") == 180
    assert parse_positive_int(" 25.9") == 25
    assert parse_positive_int(72) == 72
    assert parse_positive_int("abc") is None
    assert parse_positive_int(True) is None


def test_macro_split_rounds_half_up() -> None:
    macros = macro_split(2000)

    assert macros.protein == 150
    assert macros.carbs == 200
    assert macros.fats == 67
    assert macro_split(10).protein == 1  # 0.75 rounds up
    assert macro_split(30).fats == 1  # 1.0 exactly
