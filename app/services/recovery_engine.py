"""
Recovery score, post-workout macro buffer and rule-based suggestions.

Everything except ``RecoveryEngine.suggestions_for`` is pure: callers pass in
the profile, summaries and workouts they already hold.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from app.core.config import settings
from app.core.errors import InvalidPreconditionError
from app.models.exercise import MuscleGroupEnum
from app.repositories.summary_repository import SummaryRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.analytics import (
    AdjustmentReason,
    MacroAdjustment,
    SmartSuggestion,
    SuggestionCategory,
    SuggestionPriority,
)
from app.services.lift_math import mean

logger = logging.getLogger(__name__)

SLEEP_WEIGHT = 0.4
PROTEIN_WEIGHT = 0.35
REST_WEIGHT = 0.25
UNKNOWN_FACTOR = 50.0

HIGH_VOLUME_PERCENTILE = 0.8
MAX_CARB_BOOST = 40.0
MAX_PROTEIN_BOOST = 20.0

PLATEAU_WINDOW = 3
PLATEAU_MIN_DEFICIT = 300
PROTEIN_PER_LB = 0.7
LOW_SLEEP_RATIO = 0.7


def _capped_ratio_factor(value: Optional[float], goal: Optional[float]) -> float:
    if value is None or not goal:
        return UNKNOWN_FACTOR
    return min(value / goal, 1.0) * 100


def calculate_recovery_score(
    profile,
    sleep_hours: Optional[float],
    protein_intake: Optional[float],
    last_workout_date: Optional[date],
    on_date: date,
) -> float:
    """0.4 sleep + 0.35 protein + 0.25 rest, each factor on a 0-100 scale."""
    sleep_factor = _capped_ratio_factor(sleep_hours, profile.sleep_goal_hours)
    protein_factor = _capped_ratio_factor(protein_intake, profile.target_protein)

    if last_workout_date is None:
        rest_factor = 100.0
    else:
        rest_factor = 100.0 if (on_date - last_workout_date).days >= 1 else 50.0

    score = SLEEP_WEIGHT * sleep_factor + PROTEIN_WEIGHT * protein_factor + REST_WEIGHT * rest_factor
    return max(0.0, min(100.0, score))


def _same_workout(a, b) -> bool:
    if a is b:
        return True
    a_id = getattr(a, "id", None)
    return a_id is not None and a_id == getattr(b, "id", None)


def volume_percentile(workout, history: Sequence) -> float:
    """Share of other completed workouts with strictly lower total volume; 0.5 without history."""
    others = [w for w in history if not _same_workout(w, workout)]
    if not others:
        return 0.5
    volume = workout.total_volume
    lower = sum(1 for w in others if w.total_volume < volume)
    return lower / len(others)


def recovery_buffer_for_percentile(percentile: float) -> MacroAdjustment:
    if percentile <= HIGH_VOLUME_PERCENTILE:
        return MacroAdjustment.none()
    scale = (percentile - HIGH_VOLUME_PERCENTILE) / (1.0 - HIGH_VOLUME_PERCENTILE)
    return MacroAdjustment(
        carbs_adjustment=MAX_CARB_BOOST * scale,
        protein_adjustment=MAX_PROTEIN_BOOST * scale,
        fat_adjustment=0,
        reason=AdjustmentReason.high_volume_recovery,
    )


def calculate_recovery_buffer(workout, history: Sequence) -> MacroAdjustment:
    return recovery_buffer_for_percentile(volume_percentile(workout, history))


# ----------------------------------------------------------------------
# Suggestion rules
# ----------------------------------------------------------------------

def check_strength_plateau(profile, summaries: Sequence) -> Optional[SmartSuggestion]:
    """``summaries`` newest first. Needs three training days and at least one older one."""
    volumes = [s.total_workout_volume for s in summaries if s.total_workout_volume]
    if len(volumes) < PLATEAU_WINDOW:
        return None
    recent = volumes[:PLATEAU_WINDOW]
    older = volumes[PLATEAU_WINDOW:PLATEAU_WINDOW * 2]
    if not older:
        return None
    if mean(recent) > mean(older):
        return None

    deficit = profile.target_calories - mean(s.total_calories for s in summaries)
    if deficit <= PLATEAU_MIN_DEFICIT:
        return None

    return SmartSuggestion(
        category=SuggestionCategory.nutrition,
        priority=SuggestionPriority.high,
        title="Strength Plateau Detected",
        message=(
            f"Your strength is plateauing, but you are in a {int(deficit)}-calorie deficit. "
            "Consider increasing carbs by 40g on training days."
        ),
        actionable=True,
    )


def check_protein_intake(profile, summaries: Sequence) -> Optional[SmartSuggestion]:
    if not summaries or not profile.body_weight:
        return None
    # Body weight is stored in kg, the rule is grams per lb
    min_protein = profile.body_weight * settings.BODY_WEIGHT_TO_LB * PROTEIN_PER_LB
    if mean(s.total_protein for s in summaries) >= min_protein:
        return None

    return SmartSuggestion(
        category=SuggestionCategory.nutrition,
        priority=SuggestionPriority.medium,
        title="Low Protein Intake",
        message=f"Protein intake below optimal for muscle synthesis. Target at least {int(min_protein)}g daily.",
        actionable=True,
    )


def check_sleep_recovery(profile, summaries: Sequence) -> Optional[SmartSuggestion]:
    if not summaries or summaries[0].sleep_hours is None or not profile.sleep_goal_hours:
        return None
    sleep_hours = summaries[0].sleep_hours
    if sleep_hours / profile.sleep_goal_hours >= LOW_SLEEP_RATIO:
        return None

    return SmartSuggestion(
        category=SuggestionCategory.recovery,
        priority=SuggestionPriority.high,
        title="Low Sleep Detected",
        message=(
            "Recovery Alert: Consider 10% volume reduction for safety. "
            f"Sleep: {sleep_hours:.1f}hrs (goal: {profile.sleep_goal_hours:.1f}hrs)"
        ),
        actionable=True,
    )


def check_muscle_group_recovery(recent_workouts: Iterable) -> Optional[SmartSuggestion]:
    for workout in recent_workouts:
        quad_volume = workout.volume_by_muscle_group().get(MuscleGroupEnum.quads, 0.0)
        if quad_volume > settings.QUAD_RECOVERY_VOLUME_THRESHOLD:
            return SmartSuggestion(
                category=SuggestionCategory.workout,
                priority=SuggestionPriority.low,
                title="Leg Recovery in Progress",
                message="You had high leg volume yesterday. Upper body work recommended today.",
                actionable=False,
            )
    return None


def generate_suggestions(profile, summaries: Sequence, recent_workouts: Iterable) -> List[SmartSuggestion]:
    """Evaluate every rule independently; ``summaries`` newest first."""
    candidates = (
        check_strength_plateau(profile, summaries),
        check_protein_intake(profile, summaries),
        check_sleep_recovery(profile, summaries),
        check_muscle_group_recovery(recent_workouts),
    )
    return [s for s in candidates if s is not None]


class RecoveryEngine:
    def __init__(self, summaries: SummaryRepository, workouts: WorkoutRepository):
        self.summaries = summaries
        self.workouts = workouts

    async def suggestions_for(self, profile, today: Optional[date] = None, now: Optional[datetime] = None) -> List[SmartSuggestion]:
        today = today or date.today()
        now = now or datetime.now()
        summaries = await self.summaries.most_recent(settings.SUGGESTION_WINDOW_DAYS, on_or_before=today)
        recent_workouts = await self.workouts.completed_since(now - timedelta(hours=24))
        suggestions = generate_suggestions(profile, summaries, recent_workouts)
        logger.info("Generated %d suggestions from %d daily summaries", len(suggestions), len(summaries))
        return suggestions

    async def recovery_buffer(self, workout) -> MacroAdjustment:
        if not workout.is_completed:
            raise InvalidPreconditionError("Recovery buffer is only defined for completed workouts")
        return calculate_recovery_buffer(workout, await self.workouts.completed())
