from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class BiometricEntryCreate(BaseModel):
    date: date
    sleep_hours: Optional[float] = Field(default=None, ge=0, le=24)
    body_weight: Optional[float] = Field(default=None, gt=0)
    active_calories: Optional[float] = Field(default=None, ge=0)
    steps: Optional[int] = Field(default=None, ge=0)


class BiometricEntryRead(BaseModel):
    id: str
    date: date
    sleep_hours: Optional[float] = None
    body_weight: Optional[float] = None
    active_calories: Optional[float] = None
    steps: Optional[int] = None
    recorded_at: Optional[datetime] = None

    class Config:
        from_attributes = True
