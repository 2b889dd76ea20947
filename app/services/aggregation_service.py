import asyncio
import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from app.models.daily_summary import DailySummary
from app.models.user import UserProfile
from app.repositories.profile_repository import ProfileRepository
from app.repositories.summary_repository import SummaryRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.analytics import CorrelationData, CorrelationDataPoint
from app.services.biometric_source import BiometricSource
from app.services.lift_math import mean_or_none
from app.services.recovery_engine import calculate_recovery_score, volume_percentile

logger = logging.getLogger(__name__)

# Summary rows are created and rebuilt one at a time, whoever the caller is
_rebuild_lock = asyncio.Lock()


class AggregationService:
    def __init__(
        self,
        summaries: SummaryRepository,
        workouts: WorkoutRepository,
        profiles: ProfileRepository,
        biometrics: BiometricSource,
    ):
        self.summaries = summaries
        self.workouts = workouts
        self.profiles = profiles
        self.biometrics = biometrics

    async def compute_daily_summary(self, day: date) -> DailySummary:
        """
        Rebuild every cached value of the summary for ``day`` from the
        underlying logs. Totals are replaced, never accumulated, so calling
        this repeatedly yields the same row.
        """
        async with _rebuild_lock:
            return await self._rebuild(day)

    async def ensure_summary(self, day: date) -> DailySummary:
        """The stored summary for ``day``, created empty and committed when missing."""
        async with _rebuild_lock:
            summary = await self.summaries.get_or_create(day)
            await self.summaries.commit()
        return summary

    async def _rebuild(self, day: date) -> DailySummary:
        profile = await self.profiles.get_or_create()
        summary = await self.summaries.get_or_create(day)
        summary.profile_id = profile.id

        # Nutrition
        foods = await self.summaries.logged_foods_for_date(day)
        summary.total_calories = sum(f.calories for f in foods)
        summary.total_protein = sum(f.protein for f in foods)
        summary.total_carbs = sum(f.carbs for f in foods)
        summary.total_fat = sum(f.fat for f in foods)
        summary.total_fiber = sum(f.fiber or 0 for f in foods)

        # Training
        workouts = await self.workouts.completed_between(day, day)
        summary.total_workout_volume = sum(w.total_volume for w in workouts)
        summary.total_workout_duration = sum(w.duration_seconds or 0 for w in workouts)
        summary.workout_count = len(workouts)
        summary.average_workout_rpe = mean_or_none(w.average_rpe for w in workouts)

        if workouts:
            heaviest = max(workouts, key=lambda w: w.total_volume)
            summary.volume_percentile = volume_percentile(heaviest, await self.workouts.completed())
        else:
            summary.volume_percentile = None

        # Biometrics
        summary.sleep_hours = await self.biometrics.sleep_hours(day)
        summary.active_calories = await self.biometrics.active_calories(day)
        summary.steps = await self.biometrics.steps(day)
        summary.body_weight = await self.biometrics.body_weight() or profile.body_weight

        # Engine outputs
        summary.calorie_deficit_surplus = summary.total_calories - profile.target_calories
        summary.recovery_score = await self._recovery_score(
            profile, day, summary.sleep_hours, summary.total_protein if foods else None,
        )
        summary.updated_at = datetime.now()

        await self.summaries.commit()
        logger.debug(
            "Summary %s: %.0f kcal, %.0f volume, recovery %.1f",
            day, summary.total_calories, summary.total_workout_volume, summary.recovery_score,
        )
        return summary

    async def recovery_score_for(self, day: date) -> float:
        """Recovery score for ``day`` from the current logs. Nothing is stored."""
        profile = await self.profiles.get() or UserProfile.with_defaults()
        foods = await self.summaries.logged_foods_for_date(day)
        return await self._recovery_score(
            profile, day, await self.biometrics.sleep_hours(day), sum(f.protein for f in foods) if foods else None,
        )

    async def _recovery_score(
        self, profile, day: date, sleep_hours: Optional[float], protein_intake: Optional[float],
    ) -> float:
        end_of_day = datetime.combine(day + timedelta(days=1), time.min)
        last_workout = await self.workouts.last_completed_before(end_of_day)
        return calculate_recovery_score(
            profile,
            sleep_hours=sleep_hours,
            protein_intake=protein_intake,
            last_workout_date=last_workout.date if last_workout else None,
            on_date=day,
        )

    async def generate_correlation_data(self, days: int = 7, today: Optional[date] = None) -> CorrelationData:
        end = today or date.today()
        start = end - timedelta(days=days)
        summaries = await self.summaries.between(start, end)
        return CorrelationData(
            start_date=start,
            end_date=end,
            data_points=[
                CorrelationDataPoint(
                    date=s.date,
                    protein_intake=s.total_protein,
                    calorie_intake=s.total_calories,
                    workout_volume=s.total_workout_volume,
                    recovery_score=s.recovery_score,
                    sleep_hours=s.sleep_hours,
                )
                for s in summaries
            ],
        )
