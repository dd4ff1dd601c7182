"""
Configuration management for the account service
"""
from pydantic import ValidationError as SettingsValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

from .errors import ConfigurationError


DEVELOPMENT_ENVIRONMENTS = ("local", "development", "dev")


class Settings(BaseSettings):
    """Account service configuration loaded from environment variables"""

    # Token signing (no default secret on purpose)
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 30

    # Password hashing work factor (pbkdf2_sha256 rounds)
    PASSWORD_HASH_ROUNDS: int = 29000

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./accounts.db"
    DB_TIMEOUT_SECONDS: int = 5

    # Runtime
    ENVIRONMENT: str = "production"
    DEV_MODE: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:5500"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in DEVELOPMENT_ENVIRONMENTS


def load_settings(**overrides) -> Settings:
    """
    Load settings from the environment and refuse to continue without a
    usable signing secret.

    Raises:
        ConfigurationError: If JWT_SECRET is missing or blank, or any
            setting fails validation
    """
    try:
        settings = Settings(**overrides)
    except SettingsValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(f"Invalid configuration: {', '.join(missing)}") from e

    if not settings.JWT_SECRET.strip():
        raise ConfigurationError("JWT_SECRET must not be empty")
    return settings
