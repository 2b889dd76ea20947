"""
Population strength standards, expressed as multiples of body weight.

Thresholds are ordered rookie, average, intermediate, advanced, elite.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from app.models.exercise import MuscleGroupEnum
from app.models.user import BiologicalSexEnum


@dataclass(frozen=True)
class StandardEntry:
    rookie: float
    average: float
    intermediate: float
    advanced: float
    elite: float
    relative_to_body_weight: bool = True

    @property
    def thresholds(self) -> Tuple[float, float, float, float, float]:
        return (self.rookie, self.average, self.intermediate, self.advanced, self.elite)

    def scaled(self, factor: float) -> "StandardEntry":
        return StandardEntry(
            *(t * factor for t in self.thresholds),
            relative_to_body_weight=self.relative_to_body_weight,
        )


_PUSH = StandardEntry(0.5, 0.75, 1.0, 1.25, 1.5)
_BODYWEIGHT_PUSH = StandardEntry(0.4, 0.6, 0.8, 1.0, 1.2)
_LEGS = StandardEntry(0.75, 1.0, 1.5, 2.0, 2.5)
_HINGE = StandardEntry(1.0, 1.5, 2.0, 2.5, 3.0)
_OVERHEAD = StandardEntry(0.3, 0.5, 0.7, 0.9, 1.1)
_CURL = StandardEntry(0.15, 0.25, 0.35, 0.45, 0.55)
_ARMS = StandardEntry(0.2, 0.3, 0.4, 0.5, 0.6)

STRENGTH_STANDARDS: Dict[str, StandardEntry] = {
    "bench press": _PUSH,
    "push up": _BODYWEIGHT_PUSH,
    "chest press": _PUSH,
    "pull up": _PUSH,
    "row": _BODYWEIGHT_PUSH,
    "lat pulldown": _PUSH,
    "squat": _LEGS,
    "deadlift": _HINGE,
    "leg press": _HINGE,
    "overhead press": _OVERHEAD,
    "shoulder press": _OVERHEAD,
    "bicep curl": _CURL,
    "tricep": _ARMS,
}

# Longest keyword first so "lat pulldown" wins over any shorter containment match
_KEYWORDS_BY_SPECIFICITY = tuple(sorted(STRENGTH_STANDARDS, key=len, reverse=True))

MUSCLE_GROUP_DEFAULTS: Dict[MuscleGroupEnum, StandardEntry] = {
    MuscleGroupEnum.chest: _PUSH,
    MuscleGroupEnum.back: _PUSH,
    MuscleGroupEnum.shoulders: _OVERHEAD,
    MuscleGroupEnum.biceps: _CURL,
    MuscleGroupEnum.triceps: _ARMS,
    MuscleGroupEnum.forearms: _ARMS,
    MuscleGroupEnum.quads: _LEGS,
    MuscleGroupEnum.hamstrings: _LEGS,
    MuscleGroupEnum.glutes: _LEGS,
    MuscleGroupEnum.calves: _PUSH,
    MuscleGroupEnum.abs: _ARMS,
    MuscleGroupEnum.full_body: _PUSH,
}

# Placeholder policy, replaceable without touching the classifier
SEX_MULTIPLIER: Dict[BiologicalSexEnum, float] = {
    BiologicalSexEnum.male: 1.0,
    BiologicalSexEnum.female: 0.65,
}

VOLUME_SCALE_FACTORS: Tuple[float, float, float, float, float] = (1.5, 1.8, 2.2, 2.5, 3.0)


def match_keyword(exercise_name: str) -> Optional[StandardEntry]:
    name = exercise_name.lower()
    for keyword in _KEYWORDS_BY_SPECIFICITY:
        if keyword in name:
            return STRENGTH_STANDARDS[keyword]
    return None


def standard_for(exercise_name: str, muscle_group: MuscleGroupEnum) -> StandardEntry:
    return match_keyword(exercise_name) or MUSCLE_GROUP_DEFAULTS[muscle_group]
