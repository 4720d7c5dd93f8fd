from pathlib import Path

import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pytz.exceptions import UnknownTimeZoneError

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False

    SERVICE_NAME: str = "email-timezone-assistant"
    LOG_LEVEL: str = "INFO"

    # =================================================================
    # TIMEZONE SETTINGS
    # =================================================================
    # Calendar owner's zone. Every booking is expressed in this zone.
    CANONICAL_TIMEZONE: str = "America/Los_Angeles"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("CANONICAL_TIMEZONE")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        try:
            return pytz.timezone(value.strip()).zone
        except UnknownTimeZoneError:
            raise ValueError(f"Unknown IANA timezone: {value}") from None

    def get_log_level(self) -> str:
        """Debug mode always logs at DEBUG, regardless of LOG_LEVEL."""
        if self.debug:
            return "DEBUG"
        return self.LOG_LEVEL.upper()


settings = Settings()
