from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_workout_repository, get_workout_service
from app.models.exercise import MuscleGroupEnum
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.workout import (
    ExerciseRead,
    LogSetRequest,
    MuscleGroupVolume,
    StartWorkoutRequest,
    UpdateSetRequest,
    WorkoutRead,
    WorkoutSetRead,
)
from app.services.workout_service import WorkoutService

router = APIRouter(prefix="/workouts", tags=["workouts"])


# ==========================
# EXERCISES
# ==========================

@router.get("/exercises", response_model=List[ExerciseRead])
async def list_exercises(
        muscle_group: Optional[MuscleGroupEnum] = None,
        workouts: WorkoutRepository = Depends(get_workout_repository),
):
    return await workouts.list_exercises(muscle_group)


@router.get("/exercises/{exercise_id}/one-rm-history", response_model=List[WorkoutSetRead])
async def one_rm_history(
        exercise_id: str,
        limit: int = 10,
        service: WorkoutService = Depends(get_workout_service),
):
    return await service.one_rm_history(exercise_id, limit)


@router.get("/exercises/{exercise_id}/personal-record", response_model=WorkoutSetRead)
async def personal_record(
        exercise_id: str,
        service: WorkoutService = Depends(get_workout_service),
):
    record = await service.personal_record(exercise_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No completed sets for this exercise")
    return record



@router.delete("/exercises/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(
        exercise_id: str,
        service: WorkoutService = Depends(get_workout_service),
):
    await service.delete_exercise(exercise_id)

# ==========================
# ACTIVE SESSION
# ==========================

@router.post("/start", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
async def start_workout(
        request: StartWorkoutRequest,
        service: WorkoutService = Depends(get_workout_service),
):
    return await service.start_workout(request.name)


@router.get("/active", response_model=WorkoutRead)
async def active_workout(service: WorkoutService = Depends(get_workout_service)):
    workout = await service.active_workout()
    if workout is None:
        raise HTTPException(status_code=404, detail="No active workout session")
    return workout


@router.post("/active/sets", response_model=WorkoutSetRead, status_code=status.HTTP_201_CREATED)
async def log_set(
        request: LogSetRequest,
        service: WorkoutService = Depends(get_workout_service),
):
    return await service.log_set(
        request.exercise_id, request.weight, request.reps, request.rpe, request.is_warmup
    )


@router.patch("/active/sets/{set_id}", response_model=WorkoutSetRead)
async def update_set(
        set_id: str,
        request: UpdateSetRequest,
        service: WorkoutService = Depends(get_workout_service),
):
    return await service.update_set(set_id, request.weight, request.reps, request.rpe)


@router.delete("/active/sets/{set_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_set(set_id: str, service: WorkoutService = Depends(get_workout_service)):
    await service.delete_set(set_id)


@router.post("/active/complete", response_model=WorkoutRead)
async def complete_active_workout(service: WorkoutService = Depends(get_workout_service)):
    return await service.complete_workout()


@router.post("/active/cancel")
async def cancel_workout(service: WorkoutService = Depends(get_workout_service)):
    return {"cancelled": await service.cancel_workout()}


@router.post("/{workout_id}/complete", response_model=WorkoutRead)
async def complete_workout(workout_id: str, service: WorkoutService = Depends(get_workout_service)):
    """409 when the workout was already completed."""
    return await service.complete_workout(workout_id)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(workout_id: str, service: WorkoutService = Depends(get_workout_service)):
    await service.delete_workout(workout_id)


# ==========================
# HISTORY & VOLUME
# ==========================

@router.get("/recent", response_model=List[WorkoutRead])
async def recent_workouts(limit: int = 10, service: WorkoutService = Depends(get_workout_service)):
    return await service.recent_workouts(limit)


@router.get("/volume/weekly")
async def weekly_volume(service: WorkoutService = Depends(get_workout_service)):
    return {"total_volume": await service.weekly_volume()}


@router.get("/volume/muscle-groups", response_model=MuscleGroupVolume)
async def volume_by_muscle_group(
        start: Optional[date] = None,
        end: Optional[date] = None,
        service: WorkoutService = Depends(get_workout_service),
):
    end = end or date.today()
    start = start or end - timedelta(days=7)
    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    volumes = await service.volume_by_muscle_group(start, end)
    return MuscleGroupVolume(start=start, end=end, volumes=volumes)
