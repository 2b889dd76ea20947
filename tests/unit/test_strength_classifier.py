"""
Unit tests for StrengthClassifier and the strength standards table.

Covered:
- classify returns a category for every muscle group, rookie without data
- missing body weight -> rookie everywhere
- 60/40 blend of the 1RM and volume categories
- sex multiplier lowers the thresholds
- exercises in the same group are averaged
- keyword matching prefers the most specific keyword
"""

from types import SimpleNamespace

import pytest

from app.core.strength_standards import MUSCLE_GROUP_DEFAULTS, STRENGTH_STANDARDS, match_keyword, standard_for
from app.models.exercise import MuscleGroupEnum
from app.models.user import BiologicalSexEnum
from app.schemas.analytics import StrengthCategory
from app.services.strength_classifier import LiftRecord, StrengthClassifier, bucket, lift_records_from_sets
from tests.conftest import make_exercise, make_workout

pytestmark = pytest.mark.unit


def make_profile(body_weight=80.0, sex=BiologicalSexEnum.male):
    return SimpleNamespace(body_weight=body_weight, biological_sex=sex)


def bench(weight, reps, name="Barbell Bench Press"):
    return LiftRecord(name, MuscleGroupEnum.chest, weight, reps)


@pytest.fixture
def classifier() -> StrengthClassifier:
    return StrengthClassifier()


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

def test_empty_history_is_rookie_for_every_group(classifier):
    categories = classifier.classify(make_profile(), [])
    assert set(categories) == set(MuscleGroupEnum)
    assert all(c == StrengthCategory.rookie for c in categories.values())


def test_missing_body_weight_is_rookie(classifier):
    categories = classifier.classify(make_profile(body_weight=None), [bench(200, 1)])
    assert categories[MuscleGroupEnum.chest] == StrengthCategory.rookie


def test_one_rm_and_volume_are_blended(classifier):
    """
    80 kg lifter, 100 x 5: 1RM 112.5 is advanced (thresholds 40/60/80/100/120),
    volume 500 / 80 is rookie, 0.6 * 4 + 0.4 * 1 = 2.8 -> intermediate.
    """
    categories = classifier.classify(make_profile(), [bench(100, 5)])
    assert categories[MuscleGroupEnum.chest] == StrengthCategory.intermediate
    assert categories[MuscleGroupEnum.back] == StrengthCategory.rookie


def test_female_thresholds_are_scaled(classifier):
    """70 x 5 (1RM 78.75): average for the male table, elite once scaled by 0.65."""
    lifts = [bench(70, 5)]
    male = classifier.classify(make_profile(sex=BiologicalSexEnum.male), lifts)
    female = classifier.classify(make_profile(sex=BiologicalSexEnum.female), lifts)
    assert male[MuscleGroupEnum.chest] == StrengthCategory.average
    assert female[MuscleGroupEnum.chest] == StrengthCategory.intermediate


def test_exercises_in_a_group_are_averaged(classifier):
    """Bench press is intermediate (3), cable fly is rookie (1): the chest averages to 2."""
    lifts = [bench(100, 5), bench(20, 12, name="Cable Fly")]
    categories = classifier.classify(make_profile(), lifts)
    assert categories[MuscleGroupEnum.chest] == StrengthCategory.average


def test_classification_is_idempotent(classifier):
    lifts = [bench(100, 5), bench(90, 8)]
    assert classifier.classify(make_profile(), lifts) == classifier.classify(make_profile(), lifts)


def test_lift_records_skip_sets_without_exercise():
    exercise = make_exercise()
    workout = make_workout(exercise, [(60, 10)])
    orphan = make_workout(None, [(40, 10)])
    records = lift_records_from_sets(workout.sets + orphan.sets)
    assert records == [LiftRecord("Barbell Bench Press", MuscleGroupEnum.chest, 60, 10)]


# ---------------------------------------------------------------------------
# Standards table
# ---------------------------------------------------------------------------

def test_bucket_boundaries_are_inclusive():
    thresholds = (1, 2, 3, 4, 5)
    assert bucket(0.5, thresholds) == StrengthCategory.rookie
    assert bucket(2, thresholds) == StrengthCategory.average
    assert bucket(4, thresholds) == StrengthCategory.advanced
    assert bucket(9, thresholds) == StrengthCategory.elite


def test_longest_keyword_wins():
    assert match_keyword("Squat to Overhead Press") is STRENGTH_STANDARDS["overhead press"]
    assert match_keyword("Incline Bench Press") is STRENGTH_STANDARDS["bench press"]


def test_unknown_exercise_falls_back_to_muscle_group():
    assert match_keyword("Cable Fly") is None
    assert standard_for("Cable Fly", MuscleGroupEnum.chest) is MUSCLE_GROUP_DEFAULTS[MuscleGroupEnum.chest]


def test_every_muscle_group_has_a_default():
    assert set(MUSCLE_GROUP_DEFAULTS) == set(MuscleGroupEnum)
