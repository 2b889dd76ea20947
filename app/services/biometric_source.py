from datetime import date
from typing import Optional, Protocol, runtime_checkable

from app.repositories.biometric_repository import BiometricRepository


@runtime_checkable
class BiometricSource(Protocol):
    """Supplier of sleep, body weight and activity signals for a calendar day."""

    async def sleep_hours(self, day: date) -> Optional[float]: ...

    async def body_weight(self) -> Optional[float]: ...

    async def active_calories(self, day: date) -> Optional[float]: ...

    async def steps(self, day: date) -> Optional[int]: ...


class RecordedBiometricSource:
    """Biometrics entered by hand and stored as BiometricEntry rows."""

    def __init__(self, repo: BiometricRepository):
        self.repo = repo

    async def sleep_hours(self, day: date) -> Optional[float]:
        entry = await self.repo.get_for_date(day)
        return entry.sleep_hours if entry else None

    async def body_weight(self) -> Optional[float]:
        return await self.repo.latest_body_weight()

    async def active_calories(self, day: date) -> Optional[float]:
        entry = await self.repo.get_for_date(day)
        return entry.active_calories if entry else None

    async def steps(self, day: date) -> Optional[int]:
        entry = await self.repo.get_for_date(day)
        return entry.steps if entry else None


class NullBiometricSource:
    async def sleep_hours(self, day: date) -> Optional[float]:
        return None

    async def body_weight(self) -> Optional[float]:
        return None

    async def active_calories(self, day: date) -> Optional[float]:
        return None

    async def steps(self, day: date) -> Optional[int]:
        return None
