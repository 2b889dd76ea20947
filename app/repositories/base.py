import functools
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import StoreWriteError

logger = logging.getLogger(__name__)


def degrade_to(default_factory):
    """Log a failed analytic read and return ``default_factory()`` instead of raising."""
    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            try:
                return await method(self, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error("Store read %s failed: %s", method.__qualname__, e)
                await self.db.rollback()
                return default_factory()
        return wrapper
    return decorator


class BaseRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def commit(self) -> None:
        """Commit the unit of work; failures roll back and surface as StoreWriteError."""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Store write failed: %s", e)
            raise StoreWriteError(str(e)) from e
