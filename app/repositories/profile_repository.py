import asyncio
from typing import Optional

from sqlalchemy import select

from app.models.user import UserProfile
from app.repositories.base import BaseRepository

# Keeps two first requests from each creating a profile
_create_lock = asyncio.Lock()


class ProfileRepository(BaseRepository):
    async def get(self) -> Optional[UserProfile]:
        result = await self.db.execute(select(UserProfile).order_by(UserProfile.created_at).limit(1))
        return result.scalar_one_or_none()

    async def get_or_create(self) -> UserProfile:
        """Single-user app: the first profile row, created with default targets on first access."""
        profile = await self.get()
        if profile is not None:
            return profile
        async with _create_lock:
            profile = await self.get()
            if profile is None:
                profile = UserProfile.with_defaults()
                self.db.add(profile)
                await self.commit()
        return profile

    async def update(self, **fields) -> UserProfile:
        profile = await self.get_or_create()
        for key, value in fields.items():
            setattr(profile, key, value)
        await self.commit()
        return profile
