from datetime import date, datetime
from typing import Optional

from sqlalchemy import select

from app.core.base import new_id
from app.models.biometric import BiometricEntry
from app.repositories.base import BaseRepository, degrade_to


class BiometricRepository(BaseRepository):
    @degrade_to(lambda: None)
    async def get_for_date(self, day: date) -> Optional[BiometricEntry]:
        result = await self.db.execute(select(BiometricEntry).where(BiometricEntry.date == day))
        return result.scalar_one_or_none()

    @degrade_to(lambda: None)
    async def latest_body_weight(self) -> Optional[float]:
        result = await self.db.execute(
            select(BiometricEntry.body_weight)
            .where(BiometricEntry.body_weight.is_not(None))
            .order_by(BiometricEntry.date.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def upsert(self, day: date, **fields) -> BiometricEntry:
        """Merge non-None fields into the entry for ``day``."""
        entry = await self.get_for_date(day)
        if entry is None:
            entry = BiometricEntry(
                id=new_id(), date=day, sleep_hours=None, body_weight=None, active_calories=None, steps=None
            )
            self.db.add(entry)
        for key, value in fields.items():
            if value is not None:
                setattr(entry, key, value)
        entry.recorded_at = datetime.now()
        await self.commit()
        return entry
