"""Application configuration using pydantic-settings."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    storage_backend: Literal["memory", "sqlite"] = "memory"
    database_path: Path = Path("spendtrack.db")
    seed_sample_data: bool = True

    # Restrict every query to one owner when set
    user_id: Optional[int] = None

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Daily spending window
    default_daily_days: int = 7
    max_daily_days: int = 366

    # Logging
    log_level: str = "INFO"

    # Web server
    title: str = "Spending Tracker"
    host: str = "127.0.0.1"
    port: int = 8081
    native: bool = False

    @property
    def database_url(self) -> str:
        """Get SQLite connection URL."""
        return f"sqlite:///{self.database_path}"


settings = Settings()
