from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from the environment (and ``.env``).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Storage
    STORAGE_PATH: Path = Path("./storage/pizzaland.db")
    TEST_STORAGE_PATH: Path | None = None
    TESTING: bool = False
    DATABASE_DRIVER: str = "sqlite+aiosqlite"
    DB_URL: str | None = None
    SQLALCHEMY_ECHO: bool = False

    # HTTP
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 44044
    REQUEST_TIMEOUT_SECONDS: float | None = 5.0

    # Paging
    LIST_DEFAULT_LIMIT: int = 12
    LIST_MAX_LIMIT: int = 100

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/pizzaland")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        ``DB_URL`` when given; otherwise a SQLite file URL. With ``TESTING=True``
        and a ``TEST_STORAGE_PATH`` the test file is used instead.
        """
        if self.DB_URL:
            return self.DB_URL
        path = self.TEST_STORAGE_PATH if self.TESTING and self.TEST_STORAGE_PATH else self.STORAGE_PATH
        return f"{self.DATABASE_DRIVER}:///{path}"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("ENV", "LOG_FORMAT", mode="before")
    @classmethod
    def normalize_lowercase(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator("LIST_DEFAULT_LIMIT", "LIST_MAX_LIMIT")
    @classmethod
    def positive_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("page limits must be positive")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
