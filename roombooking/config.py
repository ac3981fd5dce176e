# roombooking/config.py
from datetime import time
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "dev"
    APP_NAME: str = "Conference Room Booking"

    # DB URL – SQLite locally, any SQLAlchemy URL in deployment
    DATABASE_URL: str = "sqlite:///./roombooking.db"

    LOG_LEVEL: str = "INFO"

    # Bearer tokens issued by /api/auth/login
    AUTH_TOKEN_TTL_MINUTES: int = 480

    # Booking rules applied by the request validators
    BUSINESS_DAY_START: time = time(8, 0)
    BUSINESS_DAY_END: time = time(18, 0)
    SLOT_GRANULARITY_MINUTES: int = 30
    MIN_BOOKING_MINUTES: int = 30
    MAX_BOOKING_MINUTES: int = 480
    MAX_ADVANCE_DAYS: int = 183

    # Twilio SMS delivery for notifications (optional)
    TWILIO_ACCOUNT_SID: Optional[str] = None
    TWILIO_AUTH_TOKEN: Optional[str] = None
    TWILIO_FROM_NUMBER: Optional[str] = None

    # Admin account created at startup when both are set
    SEED_ADMIN_USERNAME: Optional[str] = None
    SEED_ADMIN_PASSWORD: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def twilio_configured(self) -> bool:
        return bool(
            self.TWILIO_ACCOUNT_SID
            and self.TWILIO_AUTH_TOKEN
            and self.TWILIO_FROM_NUMBER
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
