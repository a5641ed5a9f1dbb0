"""Configuration management using Pydantic Settings.

Settings are loaded from the environment (and a local ``.env`` file) and
grouped by concern:
- DatabaseConfig: record store connection and pooling
- LoggingConfig: console and file logging
- MediaConfig: Cloudinary credentials and upload retry policy
- ListingConfig: table defaults shared by every admin screen
- MonetizationConfig: revenue estimation and payment fees
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseModel):
    """Record store connection and pooling configuration.

    Any SQLAlchemy async URL works; Supabase is reached through its
    Postgres connection string (``postgresql+asyncpg://...``).
    """

    url: str = "sqlite+aiosqlite:///data/db/eimusic.db"
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("data/logs/eimusic.log")
    real_time_debug: bool = True


class MediaConfig(BaseModel):
    """Cloudinary credentials and upload behaviour."""

    cloud_name: str = ""
    api_key: str = ""
    api_secret: str = ""
    default_folder: str = "eimusic"
    image_size: int = 800
    timeout_seconds: float = 30.0
    retry_count: int = 3
    retry_max_delay: float = 30.0

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class ListingConfig(BaseModel):
    """Defaults for the admin record tables."""

    page_size: int = 10
    max_page_buttons: int = 5
    recent_activity_days: int = 3
    recent_activity_limit: int = 10
    top_tracks_limit: int = 5


class MonetizationConfig(BaseModel):
    """Revenue estimation and payment fee rates."""

    revenue_per_stream: float = 0.125  # MT per stream
    mpesa_fee_rate: float = 0.01
    visa_fee_rate: float = 0.025
    paypal_fee_rate: float = 0.03


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can use flat legacy names or nested naming:
    - Flat: DATABASE_URL, CLOUDINARY_CLOUD_NAME, CONSOLE_LOG_LEVEL
    - Nested: DATABASE__URL, MEDIA__CLOUD_NAME, LOGGING__CONSOLE_LEVEL
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    media: MediaConfig = MediaConfig()
    listing: ListingConfig = ListingConfig()
    monetization: MonetizationConfig = MonetizationConfig()

    data_dir: Path = Path("data")

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Map legacy flat env vars (DATABASE_URL) onto the nested groups."""
        if not isinstance(data, dict):
            return data

        mappings = {
            "database": {
                "database_url": "url",
                "database_echo": "echo",
                "database_pool_size": "pool_size",
            },
            "logging": {
                "console_log_level": "console_level",
                "file_log_level": "file_level",
                "log_file": "log_file",
            },
            "media": {
                "cloudinary_cloud_name": "cloud_name",
                "cloudinary_api_key": "api_key",
                "cloudinary_api_secret": "api_secret",
            },
        }

        transformed: dict[str, dict[str, Any]] = {}
        for section, section_map in mappings.items():
            for env_key, field_key in section_map.items():
                if env_key in data:
                    transformed.setdefault(section, {})[field_key] = data.pop(env_key)

        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                data[section] = {**existing, **values}
            else:
                data[section] = values

        return data


# Singleton instance for application use
settings = Settings()


_LEGACY_KEY_MAP = {
    "DATABASE_URL": lambda: settings.database.url,
    "DATABASE_ECHO": lambda: settings.database.echo,
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "DATA_DIR": lambda: settings.data_dir,
    "CLOUDINARY_CLOUD_NAME": lambda: settings.media.cloud_name,
    "MEDIA_DEFAULT_FOLDER": lambda: settings.media.default_folder,
    "MEDIA_RETRY_COUNT": lambda: settings.media.retry_count,
    "MEDIA_RETRY_MAX_DELAY": lambda: settings.media.retry_max_delay,
    "LISTING_PAGE_SIZE": lambda: settings.listing.page_size,
    "LISTING_MAX_PAGE_BUTTONS": lambda: settings.listing.max_page_buttons,
    "REVENUE_PER_STREAM": lambda: settings.monetization.revenue_per_stream,
}


def get_config(key: str, default=None):
    """Get configuration value by legacy flat key with optional default.

    Example:
        >>> page_size = get_config("LISTING_PAGE_SIZE", 10)
    """
    if key in _LEGACY_KEY_MAP:
        return _LEGACY_KEY_MAP[key]()
    return default
