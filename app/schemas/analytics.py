from pydantic import BaseModel, Field, computed_field
from typing import Optional, List, Dict
from datetime import date, datetime
from enum import Enum

from app.core.base import new_id


class StrengthCategory(str, Enum):
    rookie = "rookie"
    average = "average"
    intermediate = "intermediate"
    advanced = "advanced"
    elite = "elite"

    @property
    def score(self) -> float:
        return float(_CATEGORY_ORDER.index(self) + 1)

    @classmethod
    def from_score(cls, value: float) -> "StrengthCategory":
        """Re-bucket a blended 1..5 scalar."""
        if value >= 4.5:
            return cls.elite
        if value >= 3.5:
            return cls.advanced
        if value >= 2.5:
            return cls.intermediate
        if value >= 1.5:
            return cls.average
        return cls.rookie


_CATEGORY_ORDER = list(StrengthCategory)


class SuggestionCategory(str, Enum):
    nutrition = "nutrition"
    workout = "workout"
    recovery = "recovery"
    general = "general"


class SuggestionPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class SmartSuggestion(BaseModel):
    id: str = Field(default_factory=new_id)
    category: SuggestionCategory
    priority: SuggestionPriority
    title: str
    message: str
    actionable: bool


class AdjustmentReason(str, Enum):
    high_volume_recovery = "high_volume_recovery"
    low_protein = "low_protein"
    caloric_deficit = "caloric_deficit"
    none = "none"


class MacroAdjustment(BaseModel):
    carbs_adjustment: float = 0
    protein_adjustment: float = 0
    fat_adjustment: float = 0
    reason: AdjustmentReason = AdjustmentReason.none

    @classmethod
    def none(cls) -> "MacroAdjustment":
        return cls()

    @computed_field
    @property
    def has_adjustment(self) -> bool:
        return any((self.carbs_adjustment, self.protein_adjustment, self.fat_adjustment))


class RecoveryBufferResponse(BaseModel):
    workout_id: str
    volume_percentile: float
    adjustment: MacroAdjustment


class CorrelationDataPoint(BaseModel):
    date: date
    protein_intake: float
    calorie_intake: float
    workout_volume: float
    recovery_score: float
    sleep_hours: Optional[float] = None


class CorrelationData(BaseModel):
    start_date: date
    end_date: date
    data_points: List[CorrelationDataPoint] = []

    def _average(self, attr: str) -> float:
        if not self.data_points:
            return 0.0
        return sum(getattr(p, attr) for p in self.data_points) / len(self.data_points)

    @computed_field
    @property
    def average_protein(self) -> float:
        return self._average("protein_intake")

    @computed_field
    @property
    def average_volume(self) -> float:
        return self._average("workout_volume")

    @computed_field
    @property
    def average_recovery_score(self) -> float:
        return self._average("recovery_score")


class StrengthProfileResponse(BaseModel):
    categories: Dict[str, StrengthCategory]


class RecoveryScoreResponse(BaseModel):
    date: date
    recovery_score: float


class DailyGoalStatus(BaseModel):
    date: date
    remaining: Dict[str, float]
    met_nutrition_goals: bool
    met_sleep_goal: bool
    did_workout: bool


class DailySummaryRead(BaseModel):
    id: str
    date: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    total_fiber: float
    total_workout_volume: float
    total_workout_duration: int
    workout_count: int
    average_workout_rpe: Optional[float] = None
    sleep_hours: Optional[float] = None
    active_calories: Optional[float] = None
    steps: Optional[int] = None
    body_weight: Optional[float] = None
    recovery_score: float
    volume_percentile: Optional[float] = None
    calorie_deficit_surplus: Optional[float] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
