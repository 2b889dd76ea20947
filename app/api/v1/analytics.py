from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.config import settings
from app.core.dependencies import (
    get_aggregation_service,
    get_profile_repository,
    get_recovery_engine,
    get_strength_classifier,
    get_summary_repository,
    get_workout_repository,
)
from app.core.errors import NotFoundError
from app.repositories.profile_repository import ProfileRepository
from app.repositories.summary_repository import SummaryRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.analytics import (
    CorrelationData,
    DailyGoalStatus,
    DailySummaryRead,
    RecoveryBufferResponse,
    RecoveryScoreResponse,
    SmartSuggestion,
    StrengthProfileResponse,
)
from app.services.aggregation_service import AggregationService
from app.services.recovery_engine import RecoveryEngine, volume_percentile
from app.services.strength_classifier import StrengthClassifier, lift_records_from_sets

router = APIRouter(prefix="/analytics", tags=["analytics"])


# ==========================
# STRENGTH
# ==========================

@router.get("/strength", response_model=StrengthProfileResponse)
async def strength_profile(
        profiles: ProfileRepository = Depends(get_profile_repository),
        workouts: WorkoutRepository = Depends(get_workout_repository),
        classifier: StrengthClassifier = Depends(get_strength_classifier),
):
    """Strength category for every muscle group, from completed working sets."""
    profile = await profiles.get_or_create()
    lifts = lift_records_from_sets(await workouts.sets_with_exercises())
    categories = classifier.classify(profile, lifts)
    return StrengthProfileResponse(categories={group.value: category for group, category in categories.items()})


# ==========================
# RECOVERY
# ==========================

@router.get("/recovery-score", response_model=RecoveryScoreResponse)
async def recovery_score(
        day: Optional[date] = None,
        aggregation: AggregationService = Depends(get_aggregation_service),
):
    """Score from the current logs; reading it never creates a summary."""
    day = day or date.today()
    return RecoveryScoreResponse(date=day, recovery_score=await aggregation.recovery_score_for(day))


@router.get("/recovery-buffer/{workout_id}", response_model=RecoveryBufferResponse)
async def recovery_buffer(
        workout_id: str,
        workouts: WorkoutRepository = Depends(get_workout_repository),
        engine: RecoveryEngine = Depends(get_recovery_engine),
):
    workout = await workouts.get(workout_id)
    if workout is None:
        raise NotFoundError("Workout", workout_id)
    adjustment = await engine.recovery_buffer(workout)
    return RecoveryBufferResponse(
        workout_id=workout.id,
        volume_percentile=volume_percentile(workout, await workouts.completed()),
        adjustment=adjustment,
    )


@router.get("/suggestions", response_model=List[SmartSuggestion])
async def suggestions(
        profiles: ProfileRepository = Depends(get_profile_repository),
        engine: RecoveryEngine = Depends(get_recovery_engine),
):
    profile = await profiles.get_or_create()
    return await engine.suggestions_for(profile)


# ==========================
# SUMMARIES
# ==========================

@router.get("/summaries/{day}", response_model=DailySummaryRead)
async def daily_summary(day: date, summaries: SummaryRepository = Depends(get_summary_repository)):
    summary = await summaries.get_for_date(day)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"No summary for {day}")
    return summary


@router.get("/summaries/{day}/goals", response_model=DailyGoalStatus)
async def daily_goals(
        day: date,
        summaries: SummaryRepository = Depends(get_summary_repository),
        profiles: ProfileRepository = Depends(get_profile_repository),
):
    """Remaining macros and which daily goals were met, against the current targets."""
    summary = await summaries.get_for_date(day)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"No summary for {day}")
    profile = await profiles.get_or_create()
    return DailyGoalStatus(
        date=day,
        remaining=summary.remaining_macros(profile),
        met_nutrition_goals=summary.did_meet_nutrition_goals(profile),
        met_sleep_goal=summary.did_meet_sleep_goal(profile),
        did_workout=summary.did_workout,
    )


@router.post("/summaries/{day}/recompute", response_model=DailySummaryRead)
async def recompute_summary(day: date, aggregation: AggregationService = Depends(get_aggregation_service)):
    return await aggregation.compute_daily_summary(day)


@router.get("/correlation", response_model=CorrelationData)
async def correlation(
        days: int = Query(settings.CORRELATION_DAYS_DEFAULT, ge=1, le=365),
        aggregation: AggregationService = Depends(get_aggregation_service),
):
    return await aggregation.generate_correlation_data(days)
