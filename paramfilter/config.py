from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class FilterSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PARAMFILTER_", env_file=".env", extra="ignore")

    # Date/time parsing
    TIME_ZONE: str = "Asia/Shanghai"
    DATE_LAYOUT: str = "%Y-%m-%d"
    DATETIME_LAYOUT: str = "%Y-%m-%d %H:%M:%S"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)


@lru_cache
def get_settings() -> FilterSettings:
    return FilterSettings()
