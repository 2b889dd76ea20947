from collections import defaultdict
from typing import Dict, Optional

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Boolean, Float, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.base import Base, new_id
from app.models.exercise import MuscleGroupEnum
from app.services.lift_math import estimated_one_rep_max, set_volume, mean_or_none

class Workout(Base):
    __tablename__ = "workouts"

    id = Column(String(36), primary_key=True, default=new_id)
    profile_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=True)
    duration_seconds = Column(Integer, default=0, nullable=False)
    notes = Column(String, nullable=True)
    is_completed = Column(Boolean, default=False, nullable=False)

    sets = relationship(
        "WorkoutSet",
        back_populates="workout",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="WorkoutSet.timestamp",
    )

    @property
    def total_volume(self) -> float:
        return sum(s.volume for s in self.sets)

    @property
    def average_rpe(self) -> Optional[float]:
        return mean_or_none(s.rpe for s in self.sets)

    def volume_by_muscle_group(self) -> Dict[MuscleGroupEnum, float]:
        volumes = defaultdict(float)
        for s in self.sets:
            if s.exercise is not None:
                volumes[s.exercise.muscle_group] += s.volume
        return dict(volumes)

class WorkoutSet(Base):
    __tablename__ = "workout_sets"
    __table_args__ = (
        CheckConstraint("reps > 0", name="ck_workout_sets_reps_positive"),
        CheckConstraint("weight >= 0", name="ck_workout_sets_weight_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    workout_id = Column(String(36), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    # A deleted exercise leaves the numeric history in place
    exercise_id = Column(String(36), ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True, index=True)
    set_number = Column(Integer, nullable=False, default=1)
    weight = Column(Float, nullable=False, default=0)
    reps = Column(Integer, nullable=False)
    rpe = Column(Integer, nullable=True)  # 1-10
    is_warmup = Column(Boolean, nullable=False, default=False)
    timestamp = Column(DateTime, nullable=False)
    notes = Column(String, nullable=True)

    workout = relationship("Workout", back_populates="sets")
    exercise = relationship("Exercise", lazy="selectin")

    @property
    def estimated_1rm(self) -> float:
        return estimated_one_rep_max(self.weight, self.reps)

    @property
    def volume(self) -> float:
        return set_volume(self.weight, self.reps)
