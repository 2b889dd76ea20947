import enum
from sqlalchemy import Column, Integer, String, Float, Enum, DateTime
from app.core.base import Base, new_id
from app.core.config import settings
from datetime import datetime

class BiologicalSexEnum(str, enum.Enum):
    male = "male"
    female = "female"

class ActivityLevelEnum(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"

class PrimaryGoalEnum(str, enum.Enum):
    weight_loss = "weight_loss"
    maintenance = "maintenance"
    muscle_gain = "muscle_gain"

class UserProfile(Base):
    """Singleton profile: macro targets, body metrics and goals."""
    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=True)

    target_protein = Column(Float, nullable=False, default=settings.DEFAULT_PROTEIN_TARGET)
    target_carbs = Column(Float, nullable=False, default=settings.DEFAULT_CARB_TARGET)
    target_fat = Column(Float, nullable=False, default=settings.DEFAULT_FAT_TARGET)
    target_calories = Column(Float, nullable=False, default=settings.DEFAULT_CALORIE_TARGET)

    body_weight = Column(Float, nullable=True)  # kg
    height = Column(Integer, nullable=True)  # cm
    age = Column(Integer, nullable=True)
    biological_sex = Column(Enum(BiologicalSexEnum), nullable=True)
    sleep_goal_hours = Column(Float, nullable=False, default=settings.DEFAULT_SLEEP_GOAL_HOURS)
    activity_level = Column(Enum(ActivityLevelEnum), nullable=True)
    primary_goal = Column(Enum(PrimaryGoalEnum), nullable=True)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @classmethod
    def with_defaults(cls, **fields) -> "UserProfile":
        """Build a profile whose defaults are populated before the first flush."""
        values = dict(
            id=new_id(),
            target_protein=settings.DEFAULT_PROTEIN_TARGET,
            target_carbs=settings.DEFAULT_CARB_TARGET,
            target_fat=settings.DEFAULT_FAT_TARGET,
            target_calories=settings.DEFAULT_CALORIE_TARGET,
            sleep_goal_hours=settings.DEFAULT_SLEEP_GOAL_HOURS,
            name=None,
            body_weight=None,
            height=None,
            age=None,
            biological_sex=None,
            activity_level=None,
            primary_goal=None,
        )
        values.update(fields)
        return cls(**values)
