from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SECRET_KEY: str
    DATABASE_URL: str = "sqlite:///./eventhub.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Event date/time values are wall-clock times in this zone
    TIMEZONE: str = "UTC"
    MIN_LEAD_MINUTES: int = 60

    TOKEN_MAX_AGE: int = 30 * 24 * 60 * 60
    COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = True

    CLIENT_URL: str = "http://localhost:5173"
    RUN_MIGRATIONS: bool = False

    # tell Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env")

    @field_validator("TIMEZONE")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v


settings = Settings()
