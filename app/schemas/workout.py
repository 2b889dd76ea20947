from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import date, datetime

from app.models.exercise import MuscleGroupEnum, EquipmentEnum


class ExerciseRead(BaseModel):
    id: str
    name: str
    muscle_group: MuscleGroupEnum
    equipment: EquipmentEnum
    is_compound: bool
    default_reps: Optional[int] = None
    default_tempo: Optional[str] = None

    class Config:
        from_attributes = True


class StartWorkoutRequest(BaseModel):
    name: str = "Workout"


class LogSetRequest(BaseModel):
    exercise_id: str
    weight: float = Field(ge=0)
    reps: int = Field(gt=0)
    rpe: Optional[int] = Field(default=None, ge=1, le=10)
    is_warmup: bool = False


class UpdateSetRequest(BaseModel):
    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, gt=0)
    rpe: Optional[int] = Field(default=None, ge=1, le=10)


class WorkoutSetRead(BaseModel):
    id: str
    exercise_id: Optional[str] = None
    set_number: int
    weight: float
    reps: int
    rpe: Optional[int] = None
    is_warmup: bool
    timestamp: datetime
    estimated_1rm: float
    volume: float

    class Config:
        from_attributes = True


class WorkoutRead(BaseModel):
    id: str
    name: str
    date: date
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_seconds: int
    is_completed: bool
    total_volume: float
    average_rpe: Optional[float] = None
    sets: List[WorkoutSetRead] = []

    class Config:
        from_attributes = True


class MuscleGroupVolume(BaseModel):
    start: date
    end: date
    volumes: Dict[MuscleGroupEnum, float]
