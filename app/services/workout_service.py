"""
Workout session management and training-volume queries.

The active workout is the most recently started workout that has not been
completed. Every precondition is checked before anything is mutated, so a
rejected call leaves the session exactly as it was.
"""
import asyncio
import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

from app.core.base import new_id
from app.core.errors import (
    InvalidPreconditionError,
    InvalidSetDataError,
    NoActiveWorkoutError,
    NotFoundError,
    WorkoutAlreadyCompletedError,
)
from app.models.exercise import MuscleGroupEnum
from app.models.workout import Workout, WorkoutSet
from app.repositories.profile_repository import ProfileRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.aggregation_service import AggregationService

logger = logging.getLogger(__name__)

RPE_RANGE = range(1, 11)

_session_lock = asyncio.Lock()


def validate_set_data(weight: Optional[float], reps: Optional[int], rpe: Optional[int]) -> None:
    """Raise InvalidSetDataError for values a WorkoutSet may not hold. None means "not given"."""
    if reps is not None and (isinstance(reps, bool) or not isinstance(reps, int) or reps <= 0):
        raise InvalidSetDataError("Reps must be a positive whole number")
    if weight is not None and weight < 0:
        raise InvalidSetDataError("Weight cannot be negative")
    if rpe is not None and rpe not in RPE_RANGE:
        raise InvalidSetDataError("RPE must be between 1 and 10")


class WorkoutService:
    def __init__(
        self,
        workouts: WorkoutRepository,
        profiles: ProfileRepository,
        aggregation: AggregationService,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.workouts = workouts
        self.profiles = profiles
        self.aggregation = aggregation
        self.clock = clock

    async def active_workout(self) -> Optional[Workout]:
        return await self.workouts.active()

    async def _require_active(self) -> Workout:
        workout = await self.workouts.active()
        if workout is None:
            raise NoActiveWorkoutError()
        return workout

    @staticmethod
    def _find_set(workout: Workout, set_id: str) -> WorkoutSet:
        for workout_set in workout.sets:
            if workout_set.id == set_id:
                return workout_set
        raise NotFoundError("WorkoutSet", set_id)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def start_workout(self, name: str = "Workout") -> Workout:
        async with _session_lock:
            if await self.workouts.active() is not None:
                raise InvalidPreconditionError("A workout is already in progress")

            profile = await self.profiles.get_or_create()
            now = self.clock()
            workout = Workout(
                id=new_id(),
                profile_id=profile.id,
                name=name,
                date=now.date(),
                start_time=now,
                end_time=None,
                notes=None,
                duration_seconds=0,
                is_completed=False,
                sets=[],
            )
            await self.workouts.add(workout)
        logger.info("Started workout %s (%s)", workout.id, name)
        return workout

    async def log_set(
        self,
        exercise_id: str,
        weight: float,
        reps: int,
        rpe: Optional[int] = None,
        is_warmup: bool = False,
    ) -> WorkoutSet:
        validate_set_data(weight, reps, rpe)
        if weight is None or reps is None:
            raise InvalidSetDataError("Weight and reps are required")

        async with _session_lock:
            workout = await self._require_active()
            exercise = await self.workouts.get_exercise(exercise_id)
            if exercise is None:
                raise InvalidSetDataError(f"Unknown exercise {exercise_id}")

            workout_set = WorkoutSet(
                id=new_id(),
                exercise=exercise,
                exercise_id=exercise.id,
                set_number=await self.workouts.next_set_number(workout.id, exercise.id),
                weight=weight,
                reps=reps,
                rpe=rpe,
                is_warmup=is_warmup,
                notes=None,
                timestamp=self.clock(),
            )
            workout.sets.append(workout_set)
            await self.workouts.commit()
        return workout_set

    async def update_set(
        self,
        set_id: str,
        weight: Optional[float] = None,
        reps: Optional[int] = None,
        rpe: Optional[int] = None,
    ) -> WorkoutSet:
        validate_set_data(weight, reps, rpe)

        async with _session_lock:
            workout = await self._require_active()
            workout_set = self._find_set(workout, set_id)
            if weight is not None:
                workout_set.weight = weight
            if reps is not None:
                workout_set.reps = reps
            if rpe is not None:
                workout_set.rpe = rpe
            await self.workouts.commit()
        return workout_set

    async def delete_set(self, set_id: str) -> None:
        async with _session_lock:
            workout = await self._require_active()
            workout_set = self._find_set(workout, set_id)
            workout.sets.remove(workout_set)
            await self.workouts.commit()

    async def complete_workout(self, workout_id: Optional[str] = None) -> Workout:
        """Finish ``workout_id`` (or the active workout) and rebuild its day's summary."""
        async with _session_lock:
            if workout_id is not None:
                workout = await self.workouts.get(workout_id)
                if workout is None:
                    raise NotFoundError("Workout", workout_id)
                if workout.is_completed:
                    raise WorkoutAlreadyCompletedError(workout.id)
            else:
                workout = await self._require_active()

            end_time = self.clock()
            workout.end_time = end_time
            workout.duration_seconds = max(int((end_time - workout.start_time).total_seconds()), 0)
            workout.is_completed = True
            await self.workouts.commit()

            await self.aggregation.compute_daily_summary(workout.date)

        logger.info(
            "Completed workout %s: %d sets, %.0f volume, %ds",
            workout.id, len(workout.sets), workout.total_volume, workout.duration_seconds,
        )
        return workout

    async def cancel_workout(self) -> bool:
        """Discard the active workout and its sets. False when nothing was active."""
        async with _session_lock:
            workout = await self.workouts.active()
            if workout is None:
                return False
            await self.workouts.delete(workout)
        return True

    async def delete_workout(self, workout_id: str) -> None:
        async with _session_lock:
            workout = await self.workouts.get(workout_id)
            if workout is None:
                raise NotFoundError("Workout", workout_id)
            day, was_completed = workout.date, workout.is_completed
            await self.workouts.delete(workout)
            if was_completed:
                await self.aggregation.compute_daily_summary(day)

    async def delete_exercise(self, exercise_id: str) -> None:
        """Remove an exercise from the catalog. Logged sets stay, without an exercise."""
        async with _session_lock:
            exercise = await self.workouts.get_exercise(exercise_id)
            if exercise is None:
                raise NotFoundError("Exercise", exercise_id)
            await self.workouts.delete_exercise(exercise)
        logger.info("Exercise %s deleted", exercise_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def weekly_volume(self, today: Optional[date] = None) -> float:
        today = today or self.clock().date()
        workouts = await self.workouts.completed_between(today - timedelta(days=7), today)
        return sum(w.total_volume for w in workouts)

    async def volume_by_muscle_group(self, start: date, end: date) -> Dict[MuscleGroupEnum, float]:
        volumes: Dict[MuscleGroupEnum, float] = defaultdict(float)
        for workout in await self.workouts.completed_between(start, end):
            for group, volume in workout.volume_by_muscle_group().items():
                volumes[group] += volume
        return dict(volumes)

    async def one_rm_history(self, exercise_id: str, limit: int = 10) -> List[WorkoutSet]:
        return await self.workouts.sets_for_exercise(exercise_id, limit)

    async def personal_record(self, exercise_id: str) -> Optional[WorkoutSet]:
        """Set with the highest estimated 1RM for the exercise."""
        sets = await self.workouts.sets_for_exercise(exercise_id)
        if not sets:
            return None
        return max(sets, key=lambda s: s.estimated_1rm)

    async def recent_workouts(self, limit: int = 10) -> List[Workout]:
        return await self.workouts.recent(limit)
