"""Configuration module for jobfeed."""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_API_BASE_URL = "https://discord.com/api/v9"
DEFAULT_EXPIRY_SECONDS = 600


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration."""
    token: str
    channel_id: str
    port: int = 5000
    host: str = "0.0.0.0"
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS
    poll_interval_ms: int = 2000
    sweep_interval_seconds: int = 30
    request_timeout_seconds: int = 5
    api_base_url: str = DEFAULT_API_BASE_URL
    page_size: int = 50
    ingest_url: str = ""
    loose_content_job_id: bool = False

    @property
    def polling_enabled(self) -> bool:
        return bool(self.token and self.channel_id)


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.getenv(name, default)


def _get_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise RuntimeError(f"Environment variable {name} must be an integer, got {raw!r}")
    if value <= 0:
        raise RuntimeError(f"Environment variable {name} must be positive, got {value}")
    return value


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_app_config() -> AppConfig:
    """
    Load configuration from environment variables.

    Token and channel id may be empty; polling is then disabled and only the
    HTTP endpoints are served.

    Raises:
        RuntimeError: If a numeric variable is malformed
    """
    return AppConfig(
        token=get_env("DISCORD_TOKEN", "").strip(),
        channel_id=get_env("CHANNEL_ID", "").strip(),
        port=_get_positive_int("PORT", 5000),
        host=get_env("HOST", "0.0.0.0"),
        expiry_seconds=_get_positive_int("EXPIRY_SECONDS", DEFAULT_EXPIRY_SECONDS),
        poll_interval_ms=_get_positive_int("POLL_INTERVAL_MS", 2000),
        sweep_interval_seconds=_get_positive_int("SWEEP_INTERVAL_SECONDS", 30),
        request_timeout_seconds=_get_positive_int("REQUEST_TIMEOUT_SECONDS", 5),
        api_base_url=get_env("DISCORD_API_BASE", DEFAULT_API_BASE_URL).rstrip("/"),
        page_size=_get_positive_int("POLL_PAGE_SIZE", 50),
        ingest_url=get_env("INGEST_URL", "").strip(),
        loose_content_job_id=_get_bool("LOOSE_CONTENT_JOB_ID"),
    )


def require_polling_credentials(config: AppConfig) -> None:
    """Raise if the upstream credentials needed for polling are missing."""
    if not config.token:
        raise RuntimeError("Missing required environment variable: DISCORD_TOKEN")
    if not config.channel_id:
        raise RuntimeError("Missing required environment variable: CHANNEL_ID")
