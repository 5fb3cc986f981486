"""
Application configuration using pydantic-settings.
All config is loaded from environment variables; MONGODB_URI has no default.
"""

from functools import lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from eventbook.core.exceptions import ConfigurationError

MISSING_URI_MESSAGE = "Please define the MONGODB_URI environment variable inside .env"


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Event Bookings API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database
    MONGODB_URI: str
    MONGODB_DB_NAME: str = "eventbook"
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
    }


def _uri_missing(exc: ValidationError) -> bool:
    return any(
        err["type"] == "missing" and tuple(err["loc"]) == ("MONGODB_URI",)
        for err in exc.errors()
    )


@lru_cache()
def get_settings() -> Settings:
    try:
        settings = Settings()
    except ValidationError as exc:
        if _uri_missing(exc):
            raise ConfigurationError(MISSING_URI_MESSAGE) from exc
        raise

    if not settings.MONGODB_URI.strip():
        raise ConfigurationError(MISSING_URI_MESSAGE)
    return settings
