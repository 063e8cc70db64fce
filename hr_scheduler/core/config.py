"""Application configuration using Pydantic settings."""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Application
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str
    DB_ISOLATION_LEVEL: Optional[str] = "SERIALIZABLE"  # empty string keeps the driver default
    DB_ECHO: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Scheduling
    REPORT_TIMEZONE: str = "UTC"  # decides what "today" means for report ranges
    TIMEZONE_CACHE_SIZE: int = 128

    # Retention
    RETENTION_GRACE_DAYS: int = 15
    RETENTION_SWEEP_ENABLED: bool = True
    RETENTION_SWEEP_HOUR_UTC: int = 2  # 02:00 UTC daily

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
