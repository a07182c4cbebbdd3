from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LIFECYCLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Project Lifecycle Engine"
    debug: bool = False

    # Logging
    log_level: str = "INFO"

    # Progress model
    default_client_phases: int = Field(default=4, ge=1)  # env: LIFECYCLE_DEFAULT_CLIENT_PHASES


@lru_cache
def get_settings() -> Settings:
    return Settings()
