import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_aggregation_service, get_profile_repository
from app.repositories.profile_repository import ProfileRepository
from app.schemas.profile import ProfileRead, ProfileUpdate, RecommendedTargets
from app.services.aggregation_service import AggregationService
from app.services.nutrition_calculator import NutritionCalculator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


async def _recommended_or_400(profiles: ProfileRepository) -> RecommendedTargets:
    profile = await profiles.get_or_create()
    targets = NutritionCalculator.recommended_targets(profile)
    if targets is None:
        raise HTTPException(
            status_code=400,
            detail="Body weight, height and age are needed to recommend targets",
        )
    return RecommendedTargets(**targets)


@router.get("", response_model=ProfileRead)
async def get_profile(profiles: ProfileRepository = Depends(get_profile_repository)):
    return await profiles.get_or_create()


@router.put("", response_model=ProfileRead)
async def update_profile(
        update: ProfileUpdate,
        profiles: ProfileRepository = Depends(get_profile_repository),
        aggregation: AggregationService = Depends(get_aggregation_service),
):
    """Partial update; today's summary is rebuilt because targets feed the recovery score."""
    fields = update.model_dump(exclude_unset=True, exclude_none=True)
    profile = await profiles.update(**fields)
    if fields:
        await aggregation.compute_daily_summary(date.today())
    return profile


@router.get("/recommended-targets", response_model=RecommendedTargets)
async def recommended_targets(profiles: ProfileRepository = Depends(get_profile_repository)):
    return await _recommended_or_400(profiles)


@router.post("/recommended-targets/apply", response_model=ProfileRead)
async def apply_recommended_targets(
        profiles: ProfileRepository = Depends(get_profile_repository),
        aggregation: AggregationService = Depends(get_aggregation_service),
):
    targets = await _recommended_or_400(profiles)
    logger.info("Applying recommended targets: %s", targets)
    profile = await profiles.update(
        target_calories=targets.calories,
        target_protein=targets.protein,
        target_carbs=targets.carbs,
        target_fat=targets.fat,
    )
    await aggregation.compute_daily_summary(date.today())
    return profile
