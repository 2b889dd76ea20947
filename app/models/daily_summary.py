from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.base import Base, new_id
from datetime import datetime

class DailySummary(Base):
    """One row per calendar day; every total is recomputed, never diffed."""
    __tablename__ = "daily_summaries"

    id = Column(String(36), primary_key=True, default=new_id)
    date = Column(Date, nullable=False, unique=True, index=True)
    profile_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True)

    # Nutrition totals
    total_calories = Column(Float, nullable=False, default=0)
    total_protein = Column(Float, nullable=False, default=0)
    total_carbs = Column(Float, nullable=False, default=0)
    total_fat = Column(Float, nullable=False, default=0)
    total_fiber = Column(Float, nullable=False, default=0)

    # Workout totals
    total_workout_volume = Column(Float, nullable=False, default=0)
    total_workout_duration = Column(Integer, nullable=False, default=0)  # seconds
    workout_count = Column(Integer, nullable=False, default=0)
    average_workout_rpe = Column(Float, nullable=True)

    # Biometric snapshot
    sleep_hours = Column(Float, nullable=True)
    active_calories = Column(Float, nullable=True)
    steps = Column(Integer, nullable=True)
    body_weight = Column(Float, nullable=True)

    # Engine outputs
    recovery_score = Column(Float, nullable=False, default=0)
    volume_percentile = Column(Float, nullable=True)
    calorie_deficit_surplus = Column(Float, nullable=True)

    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    logged_foods = relationship(
        "LoggedFood",
        back_populates="daily_summary",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="LoggedFood.logged_at",
    )

    @classmethod
    def empty(cls, day) -> "DailySummary":
        return cls(
            id=new_id(),
            date=day,
            total_calories=0.0,
            total_protein=0.0,
            total_carbs=0.0,
            total_fat=0.0,
            total_fiber=0.0,
            total_workout_volume=0.0,
            total_workout_duration=0,
            workout_count=0,
            average_workout_rpe=None,
            sleep_hours=None,
            active_calories=None,
            steps=None,
            body_weight=None,
            recovery_score=0.0,
            volume_percentile=None,
            calorie_deficit_surplus=None,
            logged_foods=[],
        )

    def remaining_macros(self, profile) -> dict:
        return {
            "calories": profile.target_calories - self.total_calories,
            "protein": profile.target_protein - self.total_protein,
            "carbs": profile.target_carbs - self.total_carbs,
            "fat": profile.target_fat - self.total_fat,
        }

    def did_meet_nutrition_goals(self, profile, tolerance: float = 0.05) -> bool:
        if not profile.target_protein or not profile.target_calories:
            return False
        protein_ratio = self.total_protein / profile.target_protein
        calorie_ratio = self.total_calories / profile.target_calories
        return (
            protein_ratio >= 1.0 - tolerance
            and 1.0 - tolerance <= calorie_ratio <= 1.0 + tolerance
        )

    @property
    def did_workout(self) -> bool:
        return (self.workout_count or 0) > 0

    def did_meet_sleep_goal(self, profile) -> bool:
        if self.sleep_hours is None:
            return False
        return self.sleep_hours >= profile.sleep_goal_hours
