import logging

from app.core.config import settings
from app.core.base import Base
from app.core.db import engine

# Every model must be imported so its table is registered on Base.metadata
from app.models.user import UserProfile
from app.models.exercise import Exercise
from app.models.workout import Workout, WorkoutSet
from app.models.food import FoodItem, LoggedFood, Recipe, RecipeIngredient
from app.models.daily_summary import DailySummary
from app.models.biometric import BiometricEntry

logger = logging.getLogger(__name__)


async def init_database(bind=None):
    """Create (or recreate, with RESET_DATABASE) every table."""
    async with (bind or engine).begin() as conn:
        if settings.RESET_DATABASE:
            logger.warning("RESET_DATABASE=true, dropping all tables")
            await conn.run_sync(Base.metadata.drop_all)

        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified")
