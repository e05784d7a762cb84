"""Configuration and environment handling for seriesboard."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

__all__ = [
    "ClientSettings",
    "get_data_dir",
    "get_settings",
    "get_token_path",
    "is_read_only",
]


class ClientSettings(BaseModel):
    """Client settings for talking to the measurement API.

    All settings can be customized via environment variables.
    """

    api_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL of the measurement API",
    )

    timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )

    series_limit: int = Field(
        default=200,
        description="Maximum number of series fetched for the series list",
    )

    measurement_limit: int = Field(
        default=500,
        description="Maximum number of measurements fetched per series",
    )

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create ClientSettings from environment variables.

        Environment variables:
        - SERIESBOARD_API_URL: Base URL of the API (default: http://127.0.0.1:8000)
        - SERIESBOARD_TIMEOUT: Request timeout in seconds (default: 30)
        - SERIESBOARD_SERIES_LIMIT: Series page size (default: 200)
        - SERIESBOARD_MEASUREMENT_LIMIT: Measurements per series (default: 500)
        """
        return cls(
            api_url=os.environ.get("SERIESBOARD_API_URL", cls.model_fields["api_url"].default),
            timeout=float(os.environ.get("SERIESBOARD_TIMEOUT", cls.model_fields["timeout"].default)),
            series_limit=int(os.environ.get("SERIESBOARD_SERIES_LIMIT", cls.model_fields["series_limit"].default)),
            measurement_limit=int(os.environ.get("SERIESBOARD_MEASUREMENT_LIMIT", cls.model_fields["measurement_limit"].default)),
        )


# Global settings instance
_settings: ClientSettings | None = None


def get_settings() -> ClientSettings:
    """Get client settings.

    Returns cached instance if already initialized.
    """
    global _settings
    if _settings is None:
        _settings = ClientSettings.from_env()
    return _settings


# Forbidden system directories that cannot be used as data directories
_FORBIDDEN_PATHS = frozenset(["/", "/etc", "/sys", "/dev", "/bin", "/sbin", "/usr", "/var", "/boot", "/proc"])


def _validate_data_dir(data_path: Path) -> None:
    """Validate that data directory is not a dangerous system path.

    Args:
        data_path: Path to validate

    Raises:
        ValueError: If path is a forbidden system directory
    """
    resolved_str = str(data_path.resolve())

    for forbidden in _FORBIDDEN_PATHS:
        if resolved_str == forbidden or resolved_str.rstrip("/") == forbidden:
            raise ValueError(f"SERIESBOARD_DATA_DIR cannot be set to system directory: {forbidden}")


def get_data_dir() -> Path:
    """Get the data directory for seriesboard.

    Only the login token is kept here; measurements are never stored locally.

    Resolution priority:
    1. SERIESBOARD_DATA_DIR environment variable (if set)
    2. XDG_DATA_HOME/seriesboard (if XDG_DATA_HOME is set)
    3. ~/.local/share/seriesboard (fallback)

    Raises:
        ValueError: If SERIESBOARD_DATA_DIR points to a system directory
    """
    data_dir = os.environ.get("SERIESBOARD_DATA_DIR")
    if data_dir:
        data_path = Path(data_dir).expanduser().resolve()
        _validate_data_dir(data_path)
        return data_path

    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home).expanduser() / "seriesboard"

    return Path.home() / ".local" / "share" / "seriesboard"


def get_token_path() -> Path:
    """Get the path of the file holding the bearer token."""
    return get_data_dir() / "token"


def is_read_only() -> bool:
    """Check if running in read-only mode.

    Returns:
        True if SERIESBOARD_READ_ONLY is set to "1", False otherwise.
    """
    return os.environ.get("SERIESBOARD_READ_ONLY") == "1"
