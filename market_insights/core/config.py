# market_insights/core/config.py
# -----------------------------------------------------------------------------
# Global settings (pydantic-settings v2)
# - reads the .env file and OS environment into a Settings object
# - engine thresholds live here as named constants
# -----------------------------------------------------------------------------
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # base
    APP_NAME: str = "Local Market Insights"
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite+aiosqlite:///./stores.db"

    # logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # search radii (miles)
    SEARCH_RADIUS_MILES: float = 5.0
    NEAR_RADIUS_MILES: float = 1.0
    LOCAL_RADIUS_MILES: float = 3.0
    CLOSEST_LIMIT: int = 5

    # composition
    UNDERSERVED_REFERENCE_MIN_PCT: int = 5  # reference share must exceed this
    UNDERSERVED_LOCAL_MAX_PCT: int = 3  # local share must stay below this
    UNDERSERVED_LIMIT: int = 3
    REFERENCE_TYPES_LIMIT: int = 10

    # trending
    TRENDING_LIMIT: int = 3
    CONFIDENCE_HIGH_MIN: int = 20
    CONFIDENCE_MEDIUM_MIN: int = 10

    # reference population cache, 0 = read through on every request
    REFERENCE_CACHE_TTL_SECONDS: float = 0.0

    # seed demo stores on boot
    AUTO_SEED_MOCK: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore"  # ignore unknown keys in .env
    )


settings = Settings()
