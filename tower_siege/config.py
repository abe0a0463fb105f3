import logging
import sys
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App config
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    DEBUG: bool = False

    # Match hosting
    MAX_ACTIVE_MATCHES: int = 100
    # Fixed seed for every new match's random source; fresh entropy when unset
    RNG_SEED: int | None = None

    # Admin resource grants are disabled unless a password is configured
    ADMIN_PASSWORD: str | None = None

    @field_validator("MAX_ACTIVE_MATCHES")
    @classmethod
    def validate_max_active_matches(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MAX_ACTIVE_MATCHES must be at least 1")
        return v

    @field_validator("ADMIN_PASSWORD")
    @classmethod
    def validate_admin_password(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("ADMIN_PASSWORD cannot be blank")
        return v

    @property
    def admin_enabled(self) -> bool:
        return self.ADMIN_PASSWORD is not None


def configure_logging(debug: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.DEBUG)
    logger.info("Settings loaded successfully")
    logger.debug("Max active matches: %d", settings.MAX_ACTIVE_MATCHES)
    logger.debug("Admin grants enabled: %s", settings.admin_enabled)
    return settings
