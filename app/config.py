from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./dose_tracker.db"

    # Local calendar used for monthly usage buckets (IANA timezone)
    timezone: str = "America/New_York"

    log_level: str = "INFO"

    # Extra attempts after a failed blob write
    save_retries: int = 1


@lru_cache
def get_settings() -> Settings:
    return Settings()
