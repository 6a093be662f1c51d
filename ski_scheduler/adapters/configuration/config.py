# ski_scheduler/adapters/configuration/config.py

from typing import Optional
from logging import getLevelName
from pydantic import PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"
    DEBUG: bool = False

    # Database
    DB_DRIVER: str = "asyncpg"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "ski-lessons"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = None

    # Auth
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BLACKLIST_SWEEP_INTERVAL_SECONDS: float = 600.0
    BCRYPT_ROUNDS: int = 12

    # Error notifications (SMTP)
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_USE_TLS: bool = True
    ERROR_EMAIL_FROM: Optional[str] = None
    ERROR_EMAIL_TO: Optional[str] = None

    # Built client served at "/" when set
    STATIC_DIR: Optional[str] = None

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        return str(PostgresDsn.build(
            scheme=f"postgresql+{data.get('DB_DRIVER', 'asyncpg')}",
            username=data["POSTGRES_USER"],
            password=data["POSTGRES_PASSWORD"],
            host=data["POSTGRES_HOST"],
            port=data["POSTGRES_PORT"],
            path=data["POSTGRES_DB"],
        ))

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Make sure the value is a level name known to logging."""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    @field_validator("BCRYPT_ROUNDS")
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def smtp_configured(self) -> bool:
        return bool(self.SMTP_HOST and self.ERROR_EMAIL_FROM and self.ERROR_EMAIL_TO)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_default=True)


settings = Settings()
