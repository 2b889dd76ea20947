from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./ironlog.db"
    # Drops every table on startup; development only
    RESET_DATABASE: bool = False
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Remote nutrition catalog
    OPENFOODFACTS_BASE_URL: str = "https://world.openfoodfacts.org"
    OPENFOODFACTS_TIMEOUT: float = 8.0
    REDIS_URL: Optional[str] = None

    # Food search tiers
    SEARCH_MIN_RESULTS: int = 30
    SEARCH_HISTORY_LIMIT: int = 5
    SEARCH_BUNDLED_LIMIT: int = 30
    SEARCH_CACHE_LIMIT: int = 30
    SEARCH_REMOTE_PAGE_SIZE: int = 30
    CACHE_FRESHNESS_DAYS: int = 30
    RECENT_FOODS_LIMIT: int = 10

    # Recovery & suggestions
    SUGGESTION_WINDOW_DAYS: int = 7
    BODY_WEIGHT_TO_LB: float = 2.20462
    QUAD_RECOVERY_VOLUME_THRESHOLD: float = 1000.0
    CORRELATION_DAYS_DEFAULT: int = 7

    # Profile defaults
    DEFAULT_PROTEIN_TARGET: float = 150.0
    DEFAULT_CARB_TARGET: float = 200.0
    DEFAULT_FAT_TARGET: float = 65.0
    DEFAULT_CALORIE_TARGET: float = 2200.0
    DEFAULT_SLEEP_GOAL_HOURS: float = 7.5

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

settings = Settings()
