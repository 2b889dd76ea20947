"""
Strength classification against population standards.

For every muscle group the lifts are grouped by exercise; each exercise gets a
category from its mean estimated 1RM and one from its mean volume, blended
60/40. Exercises sharing a muscle group are averaged into the group's category.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.strength_standards import SEX_MULTIPLIER, VOLUME_SCALE_FACTORS, standard_for
from app.models.exercise import MuscleGroupEnum
from app.schemas.analytics import StrengthCategory
from app.services.lift_math import estimated_one_rep_max, set_volume, mean

ONE_RM_WEIGHT = 0.6
VOLUME_WEIGHT = 0.4


@dataclass(frozen=True)
class LiftRecord:
    exercise_name: str
    muscle_group: MuscleGroupEnum
    weight: float
    reps: int


def lift_records_from_sets(sets: Iterable) -> List[LiftRecord]:
    """Adapt WorkoutSets to LiftRecords, dropping sets whose exercise is gone."""
    return [
        LiftRecord(s.exercise.name, s.exercise.muscle_group, s.weight, s.reps)
        for s in sets
        if s.exercise is not None
    ]


def bucket(value: float, thresholds: Sequence[float]) -> StrengthCategory:
    """Place ``value`` against ascending rookie..elite thresholds."""
    _, average, intermediate, advanced, elite = thresholds
    if value >= elite:
        return StrengthCategory.elite
    if value >= advanced:
        return StrengthCategory.advanced
    if value >= intermediate:
        return StrengthCategory.intermediate
    if value >= average:
        return StrengthCategory.average
    return StrengthCategory.rookie


class StrengthClassifier:
    def classify(self, profile, lifts: Iterable[LiftRecord]) -> Dict[MuscleGroupEnum, StrengthCategory]:
        """Category for every muscle group; groups without data are rookie."""
        categories = {group: StrengthCategory.rookie for group in MuscleGroupEnum}

        body_weight: Optional[float] = getattr(profile, "body_weight", None) if profile else None
        if not body_weight or body_weight <= 0:
            return categories
        sex_multiplier = SEX_MULTIPLIER.get(getattr(profile, "biological_sex", None), 1.0)

        by_group: Dict[MuscleGroupEnum, Dict[str, List[LiftRecord]]] = defaultdict(lambda: defaultdict(list))
        for lift in lifts:
            by_group[lift.muscle_group][lift.exercise_name].append(lift)

        for group, exercises in by_group.items():
            scores = [
                self.classify_exercise(name, group, records, body_weight, sex_multiplier).score
                for name, records in exercises.items()
            ]
            categories[group] = StrengthCategory.from_score(mean(scores))

        return categories

    def classify_exercise(
        self,
        exercise_name: str,
        muscle_group: MuscleGroupEnum,
        records: Sequence[LiftRecord],
        body_weight: float,
        sex_multiplier: float = 1.0,
    ) -> StrengthCategory:
        standard = standard_for(exercise_name, muscle_group).scaled(sex_multiplier)
        if standard.relative_to_body_weight:
            standard = standard.scaled(body_weight)

        one_rm_thresholds = standard.thresholds
        volume_thresholds = [t * f for t, f in zip(one_rm_thresholds, VOLUME_SCALE_FACTORS)]

        mean_one_rm = mean(estimated_one_rep_max(r.weight, r.reps) for r in records)
        mean_volume = mean(set_volume(r.weight, r.reps) for r in records)

        one_rm_category = bucket(mean_one_rm, one_rm_thresholds)
        volume_category = bucket(mean_volume / body_weight, volume_thresholds)

        blended = ONE_RM_WEIGHT * one_rm_category.score + VOLUME_WEIGHT * volume_category.score
        return StrengthCategory.from_score(blended)


strength_classifier = StrengthClassifier()
