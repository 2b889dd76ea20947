"""
Unit tests for the recovery engine.

Covered:
- calculate_recovery_score: weighting, unknown inputs, rest factor, clamping
- volume_percentile: no-history default and strictly-lower counting
- recovery buffer: zero up to the 80th percentile, linear up to 40 g / 20 g
- suggestion rules: plateau, protein, sleep, leg recovery
"""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from app.models.exercise import MuscleGroupEnum
from app.schemas.analytics import AdjustmentReason, SuggestionCategory, SuggestionPriority
from app.services.recovery_engine import (
    calculate_recovery_buffer,
    calculate_recovery_score,
    check_muscle_group_recovery,
    check_protein_intake,
    check_sleep_recovery,
    check_strength_plateau,
    generate_suggestions,
    recovery_buffer_for_percentile,
    volume_percentile,
)
from tests.conftest import make_exercise, make_workout

pytestmark = pytest.mark.unit

TODAY = date(2026, 3, 10)


def make_profile(**overrides):
    values = dict(
        target_protein=150.0,
        target_calories=2200.0,
        sleep_goal_hours=7.5,
        body_weight=80.0,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def make_summary(volume=0.0, calories=2200.0, protein=150.0, sleep=None):
    return SimpleNamespace(
        total_workout_volume=volume,
        total_calories=calories,
        total_protein=protein,
        sleep_hours=sleep,
    )


# ---------------------------------------------------------------------------
# Recovery score
# ---------------------------------------------------------------------------

def test_recovery_score_reference_example():
    """0.4 * 82.67 + 0.35 * 100 + 0.25 * 100 = 93.07"""
    score = calculate_recovery_score(
        make_profile(), sleep_hours=6.2, protein_intake=150.0, last_workout_date=None, on_date=TODAY,
    )
    assert score == pytest.approx(93.07, abs=0.1)


def test_unknown_inputs_count_as_fifty():
    score = calculate_recovery_score(
        make_profile(), sleep_hours=None, protein_intake=None, last_workout_date=None, on_date=TODAY,
    )
    assert score == pytest.approx(0.4 * 50 + 0.35 * 50 + 0.25 * 100)


def test_training_today_halves_rest_factor():
    rested = calculate_recovery_score(make_profile(), 7.5, 150.0, TODAY - timedelta(days=1), TODAY)
    trained = calculate_recovery_score(make_profile(), 7.5, 150.0, TODAY, TODAY)
    assert rested == pytest.approx(100)
    assert trained == pytest.approx(100 - 0.25 * 50)


def test_score_is_clamped_and_ratios_capped():
    score = calculate_recovery_score(make_profile(), 14.0, 400.0, None, TODAY)
    assert score == pytest.approx(100)
    low = calculate_recovery_score(make_profile(), 0.0, 0.0, TODAY, TODAY)
    assert 0 <= low <= 100


# ---------------------------------------------------------------------------
# Volume percentile and recovery buffer
# ---------------------------------------------------------------------------

@pytest.fixture
def exercise():
    return make_exercise()


def test_percentile_without_history_is_half(exercise):
    workout = make_workout(exercise, [(100, 5)])
    assert volume_percentile(workout, []) == 0.5
    assert volume_percentile(workout, [workout]) == 0.5


def test_percentile_counts_strictly_lower_workouts(exercise):
    light = make_workout(exercise, [(50, 5)])
    heavy = make_workout(exercise, [(100, 5)])
    assert volume_percentile(heavy, [light, heavy]) == 1.0
    assert volume_percentile(light, [light, heavy]) == 0.0


def test_equal_volume_is_not_lower(exercise):
    a = make_workout(exercise, [(100, 5)])
    b = make_workout(exercise, [(100, 5)])
    assert volume_percentile(a, [a, b]) == 0.0


@pytest.mark.parametrize("percentile", [0.0, 0.5, 0.8])
def test_no_buffer_up_to_eightieth_percentile(percentile):
    adjustment = recovery_buffer_for_percentile(percentile)
    assert adjustment.carbs_adjustment == 0
    assert adjustment.protein_adjustment == 0
    assert adjustment.reason == AdjustmentReason.none


def test_buffer_grows_with_percentile():
    mid = recovery_buffer_for_percentile(0.9)
    top = recovery_buffer_for_percentile(1.0)
    assert mid.carbs_adjustment == pytest.approx(20)
    assert mid.protein_adjustment == pytest.approx(10)
    assert top.carbs_adjustment == pytest.approx(40)
    assert top.protein_adjustment == pytest.approx(20)
    assert top.reason == AdjustmentReason.high_volume_recovery


def test_buffer_for_heaviest_workout(exercise):
    light = make_workout(exercise, [(50, 5)])
    heavy = make_workout(exercise, [(100, 5)])
    assert calculate_recovery_buffer(heavy, [light, heavy]).carbs_adjustment == pytest.approx(40)


# ---------------------------------------------------------------------------
# Suggestion rules
# ---------------------------------------------------------------------------

def test_plateau_in_deficit_suggests_carbs():
    summaries = [make_summary(volume=1000, calories=1500)] * 3 + [make_summary(volume=1200, calories=1500)] * 3
    suggestion = check_strength_plateau(make_profile(), summaries)
    assert suggestion is not None
    assert suggestion.priority == SuggestionPriority.high
    assert "700-calorie deficit" in suggestion.message
    assert "40g" in suggestion.message


def test_no_plateau_when_volume_is_rising():
    summaries = [make_summary(volume=1500, calories=1500)] * 3 + [make_summary(volume=1000, calories=1500)] * 3
    assert check_strength_plateau(make_profile(), summaries) is None


def test_no_plateau_without_deficit():
    summaries = [make_summary(volume=1000, calories=2100)] * 6
    assert check_strength_plateau(make_profile(), summaries) is None


def test_plateau_needs_older_training_days():
    summaries = [make_summary(volume=1000, calories=1000)] * 3 + [make_summary(volume=0, calories=1000)] * 4
    assert check_strength_plateau(make_profile(), summaries) is None


def test_low_protein_target_uses_pounds():
    """80 kg -> 176.4 lb -> 0.7 g/lb = 123 g"""
    suggestion = check_protein_intake(make_profile(), [make_summary(protein=100)] * 7)
    assert suggestion is not None
    assert suggestion.category == SuggestionCategory.nutrition
    assert "at least 123g" in suggestion.message


def test_enough_protein_is_quiet():
    assert check_protein_intake(make_profile(), [make_summary(protein=140)] * 7) is None


def test_protein_rule_needs_body_weight():
    assert check_protein_intake(make_profile(body_weight=None), [make_summary(protein=10)]) is None


def test_low_sleep_alert_uses_latest_night():
    summaries = [make_summary(sleep=5.0), make_summary(sleep=8.0)]
    suggestion = check_sleep_recovery(make_profile(), summaries)
    assert suggestion is not None
    assert suggestion.category == SuggestionCategory.recovery
    assert "Sleep: 5.0hrs (goal: 7.5hrs)" in suggestion.message
    assert check_sleep_recovery(make_profile(), list(reversed(summaries))) is None


def test_high_quad_volume_recommends_upper_body():
    squat = make_exercise("Back Squat", MuscleGroupEnum.quads)
    suggestion = check_muscle_group_recovery([make_workout(squat, [(100, 12)])])
    assert suggestion is not None
    assert suggestion.actionable is False
    assert check_muscle_group_recovery([make_workout(squat, [(100, 5)])]) is None


def test_rules_are_evaluated_independently():
    squat = make_exercise("Back Squat", MuscleGroupEnum.quads)
    summaries = [make_summary(protein=50, sleep=4.0)]
    suggestions = generate_suggestions(make_profile(), summaries, [make_workout(squat, [(120, 10)])])
    titles = {s.title for s in suggestions}
    assert titles == {"Low Protein Intake", "Low Sleep Detected", "Leg Recovery in Progress"}


def test_no_data_no_suggestions():
    assert generate_suggestions(make_profile(), [], []) == []
