from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.repositories.biometric_repository import BiometricRepository
from app.repositories.food_repository import FoodRepository
from app.repositories.profile_repository import ProfileRepository
from app.repositories.summary_repository import SummaryRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.aggregation_service import AggregationService
from app.services.biometric_source import BiometricSource, RecordedBiometricSource
from app.services.food_search_service import FoodSearchService
from app.services.nutrition_service import NutritionService
from app.services.openfoodfacts_service import FoodCatalogClient, food_catalog_client
from app.services.recovery_engine import RecoveryEngine
from app.services.strength_classifier import StrengthClassifier, strength_classifier
from app.services.workout_service import WorkoutService


# ----------------------------------------------------------------------
# Repositories: one per request, sharing the request's session
# ----------------------------------------------------------------------

def get_profile_repository(db: AsyncSession = Depends(get_db)) -> ProfileRepository:
    return ProfileRepository(db)


def get_food_repository(db: AsyncSession = Depends(get_db)) -> FoodRepository:
    return FoodRepository(db)


def get_workout_repository(db: AsyncSession = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_summary_repository(db: AsyncSession = Depends(get_db)) -> SummaryRepository:
    return SummaryRepository(db)


def get_biometric_repository(db: AsyncSession = Depends(get_db)) -> BiometricRepository:
    return BiometricRepository(db)


# ----------------------------------------------------------------------
# Collaborators
# ----------------------------------------------------------------------

def get_food_catalog_client() -> FoodCatalogClient:
    return food_catalog_client


def get_biometric_source(
        repo: BiometricRepository = Depends(get_biometric_repository),
) -> BiometricSource:
    return RecordedBiometricSource(repo)


def get_strength_classifier() -> StrengthClassifier:
    return strength_classifier


# ----------------------------------------------------------------------
# Services
# ----------------------------------------------------------------------

def get_aggregation_service(
        summaries: SummaryRepository = Depends(get_summary_repository),
        workouts: WorkoutRepository = Depends(get_workout_repository),
        profiles: ProfileRepository = Depends(get_profile_repository),
        biometrics: BiometricSource = Depends(get_biometric_source),
) -> AggregationService:
    return AggregationService(summaries, workouts, profiles, biometrics)


def get_food_search_service(
        foods: FoodRepository = Depends(get_food_repository),
        catalog: FoodCatalogClient = Depends(get_food_catalog_client),
) -> FoodSearchService:
    return FoodSearchService(foods, catalog)


def get_nutrition_service(
        foods: FoodRepository = Depends(get_food_repository),
        summaries: SummaryRepository = Depends(get_summary_repository),
        aggregation: AggregationService = Depends(get_aggregation_service),
) -> NutritionService:
    return NutritionService(foods, summaries, aggregation)


def get_workout_service(
        workouts: WorkoutRepository = Depends(get_workout_repository),
        profiles: ProfileRepository = Depends(get_profile_repository),
        aggregation: AggregationService = Depends(get_aggregation_service),
) -> WorkoutService:
    return WorkoutService(workouts, profiles, aggregation)


def get_recovery_engine(
        summaries: SummaryRepository = Depends(get_summary_repository),
        workouts: WorkoutRepository = Depends(get_workout_repository),
) -> RecoveryEngine:
    return RecoveryEngine(summaries, workouts)
