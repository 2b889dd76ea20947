from datetime import date, datetime
from typing import Iterable, List, Optional

from sqlalchemy import select, func, update

from app.models.exercise import Exercise, MuscleGroupEnum
from app.models.workout import Workout, WorkoutSet
from app.repositories.base import BaseRepository, degrade_to


class WorkoutRepository(BaseRepository):
    async def add(self, workout: Workout) -> Workout:
        self.db.add(workout)
        await self.commit()
        return workout

    async def get(self, workout_id: str) -> Optional[Workout]:
        result = await self.db.execute(select(Workout).where(Workout.id == workout_id))
        return result.scalar_one_or_none()

    async def delete(self, workout: Workout) -> None:
        # Sets go with the workout (delete-orphan cascade)
        await self.db.delete(workout)
        await self.commit()

    async def active(self) -> Optional[Workout]:
        """Most recently started workout that is not completed yet."""
        result = await self.db.execute(
            select(Workout)
            .where(Workout.is_completed.is_(False))
            .order_by(Workout.start_time.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Completed-workout queries
    # ------------------------------------------------------------------

    @degrade_to(list)
    async def completed(self) -> List[Workout]:
        result = await self.db.execute(
            select(Workout).where(Workout.is_completed.is_(True)).order_by(Workout.start_time)
        )
        return list(result.scalars().all())

    @degrade_to(list)
    async def completed_between(self, start: date, end: date) -> List[Workout]:
        """Completed workouts whose date falls in ``[start, end]``."""
        result = await self.db.execute(
            select(Workout)
            .where(Workout.is_completed.is_(True), Workout.date >= start, Workout.date <= end)
            .order_by(Workout.start_time)
        )
        return list(result.scalars().all())

    @degrade_to(list)
    async def completed_since(self, since: datetime) -> List[Workout]:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.is_completed.is_(True), Workout.start_time >= since)
            .order_by(Workout.start_time.desc())
        )
        return list(result.scalars().all())

    @degrade_to(lambda: None)
    async def last_completed_before(self, before: datetime) -> Optional[Workout]:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.is_completed.is_(True), Workout.start_time < before)
            .order_by(Workout.start_time.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    @degrade_to(list)
    async def recent(self, limit: int) -> List[Workout]:
        result = await self.db.execute(
            select(Workout)
            .where(Workout.is_completed.is_(True))
            .order_by(Workout.start_time.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Sets
    # ------------------------------------------------------------------

    async def get_set(self, set_id: str) -> Optional[WorkoutSet]:
        result = await self.db.execute(select(WorkoutSet).where(WorkoutSet.id == set_id))
        return result.scalar_one_or_none()

    async def next_set_number(self, workout_id: str, exercise_id: str) -> int:
        result = await self.db.execute(
            select(func.count(WorkoutSet.id)).where(
                WorkoutSet.workout_id == workout_id, WorkoutSet.exercise_id == exercise_id
            )
        )
        return result.scalar_one() + 1

    @degrade_to(list)
    async def sets_with_exercises(self, include_warmups: bool = False) -> List[WorkoutSet]:
        """Sets from completed workouts that still reference an exercise."""
        stmt = (
            select(WorkoutSet)
            .join(Workout, WorkoutSet.workout_id == Workout.id)
            .where(Workout.is_completed.is_(True), WorkoutSet.exercise_id.is_not(None))
            .order_by(WorkoutSet.timestamp)
        )
        if not include_warmups:
            stmt = stmt.where(WorkoutSet.is_warmup.is_(False))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    @degrade_to(list)
    async def sets_for_exercise(self, exercise_id: str, limit: Optional[int] = None) -> List[WorkoutSet]:
        stmt = (
            select(WorkoutSet)
            .join(Workout, WorkoutSet.workout_id == Workout.id)
            .where(
                Workout.is_completed.is_(True),
                WorkoutSet.exercise_id == exercise_id,
                WorkoutSet.is_warmup.is_(False),
            )
            .order_by(WorkoutSet.timestamp.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------

    async def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        result = await self.db.execute(select(Exercise).where(Exercise.id == exercise_id))
        return result.scalar_one_or_none()

    async def list_exercises(self, muscle_group: Optional[MuscleGroupEnum] = None) -> List[Exercise]:
        stmt = select(Exercise).order_by(Exercise.name)
        if muscle_group is not None:
            stmt = stmt.where(Exercise.muscle_group == muscle_group)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count_exercises(self) -> int:
        result = await self.db.execute(select(func.count(Exercise.id)))
        return result.scalar_one()

    async def add_exercises(self, exercises: Iterable[Exercise]) -> None:
        self.db.add_all(list(exercises))
        await self.commit()

    async def delete_exercise(self, exercise: Exercise) -> None:
        """Delete an exercise; historical sets keep their weight and reps."""
        await self.db.execute(
            update(WorkoutSet).where(WorkoutSet.exercise_id == exercise.id).values(exercise_id=None)
        )
        await self.db.delete(exercise)
        await self.commit()
