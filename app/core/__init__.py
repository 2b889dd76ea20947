from app.core.config import settings
from app.core.base import Base
from app.core.db import engine, get_db
from app.core.database import init_database

__all__ = ["settings", "engine", "Base", "get_db", "init_database"]