"""
Load the bundled exercise catalog into the database on first start
"""
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import AsyncSessionLocal
from app.core.exercise_library import EXERCISE_LIBRARY
from app.models.exercise import Exercise
from app.repositories.workout_repository import WorkoutRepository

logger = logging.getLogger(__name__)


async def seed_exercises(db: AsyncSession) -> int:
    """Import the catalog if the exercises table is empty. Returns the number of rows added."""
    repo = WorkoutRepository(db)
    existing = await repo.count_exercises()
    if existing > 0:
        logger.info("Exercise catalog already holds %d exercises, skipping import", existing)
        return 0

    logger.info("Importing %d exercises...", len(EXERCISE_LIBRARY))
    await repo.add_exercises(
        Exercise(
            name=data["name"],
            muscle_group=data["muscle_group"],
            equipment=data["equipment"],
            is_compound=data.get("is_compound", False),
            default_reps=data.get("default_reps"),
            default_tempo=data.get("default_tempo"),
            instructions=data.get("instructions"),
        )
        for data in EXERCISE_LIBRARY
    )
    logger.info("Imported %d exercises", len(EXERCISE_LIBRARY))
    return len(EXERCISE_LIBRARY)


async def main():
    async with AsyncSessionLocal() as db:
        await seed_exercises(db)


if __name__ == "__main__":
    asyncio.run(main())
