from datetime import date, datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.models.daily_summary import DailySummary
from app.models.food import LoggedFood
from app.repositories.base import BaseRepository, degrade_to


def day_bounds(day: date):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class SummaryRepository(BaseRepository):
    async def get_for_date(self, day: date) -> Optional[DailySummary]:
        result = await self.db.execute(select(DailySummary).where(DailySummary.date == day))
        return result.scalar_one_or_none()

    async def get_or_create(self, day: date) -> DailySummary:
        """Summaries are created lazily on the first write touching their date."""
        summary = await self.get_for_date(day)
        if summary is None:
            summary = DailySummary.empty(day)
            self.db.add(summary)
            try:
                await self.db.flush()
            except IntegrityError:
                # another writer created the day first
                await self.db.rollback()
                summary = await self.get_for_date(day)
        return summary

    @degrade_to(list)
    async def between(self, start: date, end: date, descending: bool = False) -> List[DailySummary]:
        order = DailySummary.date.desc() if descending else DailySummary.date.asc()
        result = await self.db.execute(
            select(DailySummary)
            .where(DailySummary.date >= start, DailySummary.date <= end)
            .order_by(order)
        )
        return list(result.scalars().all())

    @degrade_to(list)
    async def most_recent(self, limit: int, on_or_before: date) -> List[DailySummary]:
        result = await self.db.execute(
            select(DailySummary)
            .where(DailySummary.date <= on_or_before)
            .order_by(DailySummary.date.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    @degrade_to(list)
    async def logged_foods_for_date(self, day: date) -> List[LoggedFood]:
        start, end = day_bounds(day)
        result = await self.db.execute(
            select(LoggedFood)
            .where(LoggedFood.logged_at >= start, LoggedFood.logged_at < end)
            .order_by(LoggedFood.logged_at)
        )
        return list(result.scalars().all())
