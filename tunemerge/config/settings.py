"""Configuration management using Pydantic Settings.

Settings are loaded from the environment (and a local ``.env`` file) and grouped
into logical sections:
- LoggingConfig: Logging levels, files, and debugging options
- CredentialsConfig: Spotify access token used by the CLI
- APIConfig: Spotify request behaviour (concurrency, timeouts, retries)
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("tunemerge.log")
    real_time_debug: bool = True


class CredentialsConfig(BaseModel):
    """Credentials supplied by the sign-in layer."""

    # Bearer token obtained elsewhere; never refreshed here
    spotify_access_token: str = ""


class APIConfig(BaseModel):
    """Spotify API request configuration."""

    spotify_concurrency: int = 10
    spotify_request_timeout: float = 10.0
    # 0 means a failed request is terminal
    spotify_retry_count: int = 0
    spotify_market: str | None = None
    playlists_page_limit: int = 50


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: SPOTIFY_ACCESS_TOKEN, CONSOLE_LOG_LEVEL, SPOTIFY_API_CONCURRENCY
    - Nested: CREDENTIALS__SPOTIFY_ACCESS_TOKEN, LOGGING__CONSOLE_LEVEL
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    credentials: CredentialsConfig = CredentialsConfig()
    api: APIConfig = APIConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Map flat environment variables onto the nested structure."""
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            if env_key in data:
                transformed.setdefault("logging", {})[field_key] = data.pop(env_key)

        if "spotify_access_token" in data:
            transformed.setdefault("credentials", {})["spotify_access_token"] = (
                data.pop("spotify_access_token")
            )

        api_mapping = {
            "spotify_api_concurrency": "spotify_concurrency",
            "spotify_api_request_timeout": "spotify_request_timeout",
            "spotify_api_retry_count": "spotify_retry_count",
            "spotify_market": "spotify_market",
            "spotify_playlists_page_limit": "playlists_page_limit",
        }
        for env_key, field_key in api_mapping.items():
            if env_key in data:
                transformed.setdefault("api", {})[field_key] = data.pop(env_key)

        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                values = {**existing, **values}
            data[section] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# BACKWARD COMPATIBILITY FUNCTIONS
# =============================================================================

_LEGACY_KEY_MAP = {
    # Logging settings
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    # Credentials
    "SPOTIFY_ACCESS_TOKEN": lambda: settings.credentials.spotify_access_token,
    # Spotify API settings
    "SPOTIFY_API_CONCURRENCY": lambda: settings.api.spotify_concurrency,
    "SPOTIFY_API_REQUEST_TIMEOUT": lambda: settings.api.spotify_request_timeout,
    "SPOTIFY_API_RETRY_COUNT": lambda: settings.api.spotify_retry_count,
    "SPOTIFY_MARKET": lambda: settings.api.spotify_market,
    "SPOTIFY_PLAYLISTS_PAGE_LIMIT": lambda: settings.api.playlists_page_limit,
}


def get_config(key: str, default=None):
    """Get configuration value by flat key with optional default.

    Example:
        >>> concurrency = get_config("SPOTIFY_API_CONCURRENCY", 10)
    """
    if key in _LEGACY_KEY_MAP:
        value = _LEGACY_KEY_MAP[key]()
        return default if value is None else value

    return default
