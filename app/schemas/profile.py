from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.user import BiologicalSexEnum, ActivityLevelEnum, PrimaryGoalEnum


class ProfileRead(BaseModel):
    id: str
    name: Optional[str] = None
    target_protein: float
    target_carbs: float
    target_fat: float
    target_calories: float
    body_weight: Optional[float] = None
    height: Optional[int] = None
    age: Optional[int] = None
    biological_sex: Optional[BiologicalSexEnum] = None
    sleep_goal_hours: float
    activity_level: Optional[ActivityLevelEnum] = None
    primary_goal: Optional[PrimaryGoalEnum] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    target_protein: Optional[float] = Field(default=None, gt=0)
    target_carbs: Optional[float] = Field(default=None, ge=0)
    target_fat: Optional[float] = Field(default=None, ge=0)
    target_calories: Optional[float] = Field(default=None, gt=0)
    body_weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    age: Optional[int] = Field(default=None, gt=0)
    biological_sex: Optional[BiologicalSexEnum] = None
    sleep_goal_hours: Optional[float] = Field(default=None, gt=0, le=24)
    activity_level: Optional[ActivityLevelEnum] = None
    primary_goal: Optional[PrimaryGoalEnum] = None


class RecommendedTargets(BaseModel):
    calories: int
    protein: int
    carbs: int
    fat: int
