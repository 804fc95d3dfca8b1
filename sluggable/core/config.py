import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding='utf-8', extra='ignore')

    # --- General ---
    PROJECT_NAME: str = "Sluggable"
    ENVIRONMENT: str = Field("stage", validation_alias="ENV", alias_priority=2)
    LOG_LEVEL: str = "INFO"

    # --- Slug defaults (used when SlugOptions does not override them) ---
    SLUG_SEPARATOR: str = "-"
    SLUG_LANGUAGE: Optional[str] = "en"
    SLUG_MAXIMUM_LENGTH: int = 250

    # --- Primary DB ---
    DATABASE_URL: str = "sqlite:///./sluggable.db"
    DB_ECHO: bool = False

    @field_validator('SLUG_LANGUAGE', mode='before')
    @classmethod
    def blank_language_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper())


# Instantiate
settings = Settings()

# Debug print in development
if settings.ENVIRONMENT == "development":
    print("--- Loaded Sluggable Settings ---")
    for k, v in settings.model_dump().items():
        if "password" in k.lower():
            print(f"{k}: ******")
        else:
            print(f"{k}: {v}")
    print("--- End Sluggable Settings ---")
