"""Configuration settings for the sun phase service."""

import os
from datetime import timedelta
from typing import Final, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from sun_phase.logging_config import resolve_level

# API Configuration
SUN_PHASE_PATH: Final[str] = "/weather/sun_phase/v1"
SUN_PHASE_RESOURCE_TYPE: Final[str] = "sun_phase"
JSONAPI_MEDIA_TYPE: Final[str] = "application/vnd.api+json"

# Weather Underground
DEFAULT_WU_BASE_URL: Final[str] = "https://api.wunderground.com/api"
DEFAULT_WU_TIMEOUT_SECONDS: Final[float] = 5.0

# Cache entries are kept for a week
CACHE_TTL: Final[timedelta] = timedelta(hours=168)

DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_HTTP_PORT: Final[int] = 8080
DEFAULT_REDIS_PORT: Final[int] = 6379
DEFAULT_REDIS_DB: Final[int] = 0
DEFAULT_REDIS_PREFIX: Final[str] = "ph:"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"


class ConfigError(Exception):
    """Raised when the environment does not describe a usable configuration."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class Settings(BaseModel):
    """Process-wide settings, loaded once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    http_host: str = DEFAULT_HOST
    http_port: int = DEFAULT_HTTP_PORT

    redis_addr: str
    redis_password: Optional[str] = None
    redis_db: int = DEFAULT_REDIS_DB
    redis_prefix: str = DEFAULT_REDIS_PREFIX

    wu_key: str
    wu_location: str
    wu_base_url: str = DEFAULT_WU_BASE_URL
    wu_timeout_seconds: float = DEFAULT_WU_TIMEOUT_SECONDS

    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def redis_host(self) -> str:
        host, _, _ = self.redis_addr.rpartition(":")
        return host or self.redis_addr

    @property
    def redis_port(self) -> int:
        host, _, port = self.redis_addr.rpartition(":")
        if not host:
            return DEFAULT_REDIS_PORT
        return int(port)


def _parse_number(environ: Mapping[str, str], name: str, default, cast):
    raw = environ.get(name, "")
    if raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"Error parsing {name}: {e}") from e


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Variables to read (defaults to ``os.environ``)

    Returns:
        Populated Settings instance

    Raises:
        ConfigError: If required variables are missing or a numeric one is malformed.
            All missing variables are reported together, in check order.
    """
    if environ is None:
        environ = os.environ

    missing = []

    http_port = _parse_number(environ, "HTTP_PORT", DEFAULT_HTTP_PORT, int)

    redis_addr = environ.get("REDIS_ADDR", "")
    if not redis_addr:
        missing.append("REDIS_ADDR")

    redis_db = _parse_number(environ, "REDIS_DB", DEFAULT_REDIS_DB, int)

    wu_key = environ.get("WU_KEY", "")
    if not wu_key:
        missing.append("WU_KEY")

    wu_location = environ.get("WU_LOCATION", "")
    if not wu_location:
        missing.append("WU_LOCATION")

    if missing:
        raise ConfigError(f"Environment variables missing: {missing}", missing=missing)

    host, sep, port = redis_addr.rpartition(":")
    if sep and not (host and port.isdigit()):
        raise ConfigError(f"Error parsing REDIS_ADDR: expected host[:port], got {redis_addr!r}")

    log_level = environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL
    try:
        resolve_level(log_level)
    except ValueError as e:
        raise ConfigError(f"Error parsing LOG_LEVEL: {e}") from e

    return Settings(
        http_host=environ.get("HOST") or DEFAULT_HOST,
        http_port=http_port,
        redis_addr=redis_addr,
        redis_password=environ.get("REDIS_PASSWORD") or None,
        redis_db=redis_db,
        redis_prefix=environ.get("REDIS_PREFIX") or DEFAULT_REDIS_PREFIX,
        wu_key=wu_key,
        wu_location=wu_location,
        wu_base_url=environ.get("WU_BASE_URL") or DEFAULT_WU_BASE_URL,
        wu_timeout_seconds=_parse_number(
            environ, "WU_TIMEOUT_SECONDS", DEFAULT_WU_TIMEOUT_SECONDS, float
        ),
        log_level=log_level.upper(),
    )
