"""
Unit tests for NutritionCalculator.

Covered:
- calculate_bmr: Mifflin-St Jeor for male and female
- calculate_tdee: activity multiplier, medium fallback
- calculate_macros: ratios per goal
- recommended_targets: goal calorie factor, None without body metrics

No database or external services involved.
"""

from types import SimpleNamespace

import pytest

from app.models.user import ActivityLevelEnum, BiologicalSexEnum, PrimaryGoalEnum
from app.services.nutrition_calculator import NutritionCalculator

pytestmark = pytest.mark.unit


def make_profile(**overrides):
    values = dict(
        body_weight=80.0,
        height=180,
        age=30,
        biological_sex=BiologicalSexEnum.male,
        activity_level=ActivityLevelEnum.medium,
        primary_goal=PrimaryGoalEnum.maintenance,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


# ---------------------------------------------------------------------------
# calculate_bmr
# ---------------------------------------------------------------------------

def test_calculate_bmr_male():
    """10*70 + 6.25*175 - 5*30 + 5 = 1648.75"""
    bmr = NutritionCalculator.calculate_bmr(weight=70, height=175, age=30, sex="male")
    assert bmr == pytest.approx(10 * 70 + 6.25 * 175 - 5 * 30 + 5)


def test_calculate_bmr_female():
    """10*60 + 6.25*165 - 5*25 - 161 = 1345.25"""
    bmr = NutritionCalculator.calculate_bmr(weight=60, height=165, age=25, sex="female")
    assert bmr == pytest.approx(10 * 60 + 6.25 * 165 - 5 * 25 - 161)


# ---------------------------------------------------------------------------
# calculate_tdee
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("level,multiplier", [("low", 1.2), ("medium", 1.55), ("high", 1.9)])
def test_calculate_tdee(level, multiplier):
    assert NutritionCalculator.calculate_tdee(1600.0, level) == pytest.approx(1600 * multiplier)


def test_calculate_tdee_unknown_activity_uses_medium_fallback():
    assert NutritionCalculator.calculate_tdee(2000.0, "unknown_level") == pytest.approx(2000 * 1.55)


# ---------------------------------------------------------------------------
# calculate_macros
# ---------------------------------------------------------------------------

def test_calculate_macros_maintenance():
    """30/40/30 of 2000 kcal -> 150 g protein, 200 g carbs, 66 g fat"""
    assert NutritionCalculator.calculate_macros(2000, goal="maintenance") == {
        "protein": 150,
        "carbs": 200,
        "fat": 66,
    }


def test_calculate_macros_unknown_goal_uses_maintenance():
    assert NutritionCalculator.calculate_macros(2000, goal="bulk?") == NutritionCalculator.calculate_macros(2000)


# ---------------------------------------------------------------------------
# recommended_targets
# ---------------------------------------------------------------------------

def test_recommended_targets_for_maintenance():
    """BMR 1780, TDEE 2759 -> 2759 kcal"""
    targets = NutritionCalculator.recommended_targets(make_profile())
    assert targets["calories"] == 2759
    assert targets["protein"] == int(2759 * 0.30 / 4)


def test_weight_loss_eats_less_than_muscle_gain():
    cut = NutritionCalculator.recommended_targets(make_profile(primary_goal=PrimaryGoalEnum.weight_loss))
    bulk = NutritionCalculator.recommended_targets(make_profile(primary_goal=PrimaryGoalEnum.muscle_gain))
    assert cut["calories"] < bulk["calories"]


def test_missing_defaults_are_male_medium_maintenance():
    defaults = make_profile(biological_sex=None, activity_level=None, primary_goal=None)
    assert NutritionCalculator.recommended_targets(defaults) == NutritionCalculator.recommended_targets(make_profile())


@pytest.mark.parametrize("missing", ["body_weight", "height", "age"])
def test_incomplete_profile_has_no_targets(missing):
    assert NutritionCalculator.recommended_targets(make_profile(**{missing: None})) is None
