"""Configuration management for the gather board."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class TrackerSettings(BaseSettings):
    """Tracker service settings.

    File locations may be relative; they are resolved against ``data_dir``.
    """

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    # Server
    host: str = Field(default="0.0.0.0", alias="TRACKER_HOST")
    port: int = Field(default=3001, alias="TRACKER_PORT")

    # Storage
    data_dir: Path = Field(default=Path("."), alias="TRACKER_DATA_DIR")
    items_file: Path = Field(default=Path("items.json"), alias="TRACKER_ITEMS_FILE")
    config_file: Path = Field(default=Path("config.json"), alias="TRACKER_CONFIG_FILE")
    backups_dir: Path = Field(default=Path("backups"), alias="TRACKER_BACKUPS_DIR")
    static_dir: Path = Field(default=Path("public"), alias="TRACKER_STATIC_DIR")

    # Snapshots
    backup_interval_seconds: float = Field(default=300.0, alias="TRACKER_BACKUP_INTERVAL")
    backup_retention: int = Field(default=50, alias="TRACKER_BACKUP_RETENTION")

    # Live updates
    keepalive_seconds: float = Field(default=30.0, alias="TRACKER_KEEPALIVE_SECONDS")
    subscriber_buffer: int = Field(default=4, alias="TRACKER_SUBSCRIBER_BUFFER")

    # Auth
    cookie_name: str = Field(default="auth_token", alias="TRACKER_COOKIE_NAME")
    cookie_max_age: int = Field(default=30 * 24 * 60 * 60, alias="TRACKER_COOKIE_MAX_AGE")
    initial_password: Optional[str] = Field(default=None, alias="TRACKER_INITIAL_PASSWORD")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: Path = Field(default=Path("logs/tracker"), alias="TRACKER_LOG_DIR")
    log_to_file: bool = Field(default=True, alias="TRACKER_LOG_TO_FILE")

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.data_dir / path

    @property
    def items_path(self) -> Path:
        return self._resolve(self.items_file)

    @property
    def config_path(self) -> Path:
        return self._resolve(self.config_file)

    @property
    def backups_path(self) -> Path:
        return self._resolve(self.backups_dir)

    @property
    def static_path(self) -> Path:
        return self._resolve(self.static_dir)


@lru_cache
def get_settings() -> TrackerSettings:
    """Get cached settings instance."""
    return TrackerSettings()
