# fau_portal/core/config.py

import logging
import secrets
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fau_portal.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 32
MIN_BCRYPT_ROUNDS = 10


class Settings(BaseSettings):
    # Values come straight from the process environment (Vercel/Docker style).
    model_config = SettingsConfigDict(extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    DATABASE_URL: Optional[str] = None
    DATABASE_URL_LOCAL: str = "sqlite:///./fau_portal.db"

    # --- Session signing ---
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    SESSION_TTL_MINUTES: int = 120
    BCRYPT_ROUNDS: int = 12
    COOKIE_SECURE: Optional[bool] = None
    SESSION_COOKIE_NAME: str = "session"
    CSRF_COOKIE_NAME: str = "csrf-token"
    CSRF_HEADER_NAME: str = "X-CSRF-Token"

    CORS_ORIGINS: str = "http://localhost:5000,http://localhost:3000"

    # --- Email (optional: absence turns sending into a no-op) ---
    RESEND_API_KEY: Optional[str] = None
    EMAIL_FROM: str = "FAU Erdal Barnehage <noreply@fau-erdal.no>"
    COUNCIL_EMAIL: str = "fauerdalbarnehage@gmail.com"

    # --- Reminder scheduler ---
    SCHEDULER_ENABLED: bool = True
    REMINDER_CHECK_INTERVAL_MINUTES: int = 60
    REMINDER_WINDOW_START_HOURS: float = 23
    REMINDER_WINDOW_END_HOURS: float = 25
    REMINDER_RETENTION_DAYS: int = 3
    TIMEZONE: str = "Europe/Oslo"

    # --- Registration rules ---
    PHOTO_SLOT_MINUTES: int = 10
    MAX_ATTENDEES_PER_REGISTRATION: int = 10

    RATE_LIMIT_ENABLED: bool = True

    # --- Admin bootstrap ---
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_NAME: str = "FAU Admin"

    @model_validator(mode="after")
    def _ephemeral_local_secret(self):
        # Local runs without a secret get a random one per process, never a
        # fixed default. Production is checked in validate_for_startup().
        if not self.JWT_SECRET and not self.is_production:
            logger.warning(
                "JWT_SECRET is not set; using a random per-process secret. "
                "Sessions will not survive a restart."
            )
            self.JWT_SECRET = secrets.token_urlsafe(48)
        return self

    @property
    def is_production(self) -> bool:
        return self.ENV == "prod"

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.is_production:
            return self.DATABASE_URL or ""
        return self.DATABASE_URL or self.DATABASE_URL_LOCAL

    @property
    def cookie_secure(self) -> bool:
        if self.COOKIE_SECURE is not None:
            return self.COOKIE_SECURE
        return self.is_production

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def email_enabled(self) -> bool:
        return bool(self.RESEND_API_KEY)

    def validate_for_startup(self) -> None:
        """
        Refuse to serve traffic with an insecure or incomplete configuration.

        Raises:
            ConfigurationError: listing every problem found.
        """
        problems = []
        if self.is_production:
            if not self.DATABASE_URL:
                problems.append("DATABASE_URL must be set in production")
            if not self.JWT_SECRET or len(self.JWT_SECRET) < MIN_SECRET_LENGTH:
                problems.append(
                    f"JWT_SECRET must be set to at least {MIN_SECRET_LENGTH} characters in production"
                )
        if self.BCRYPT_ROUNDS < MIN_BCRYPT_ROUNDS:
            problems.append(f"BCRYPT_ROUNDS must be at least {MIN_BCRYPT_ROUNDS}")
        if self.REMINDER_WINDOW_START_HOURS >= self.REMINDER_WINDOW_END_HOURS:
            problems.append("REMINDER_WINDOW_START_HOURS must be below REMINDER_WINDOW_END_HOURS")
        if problems:
            raise ConfigurationError("; ".join(problems))


# Create a single instance of the settings
settings = Settings()
