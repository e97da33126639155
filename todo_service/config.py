"""Service configuration from environment variables.

Environment variables checked:
- TODO_SERVICE_HOST: bind address (default 0.0.0.0)
- TODO_SERVICE_PORT: listen port (default 8080)
- TODO_SERVICE_ALLOWED_ORIGINS: comma-separated CORS origins
  (default http://localhost:3000)
- TODO_SERVICE_LOG_LEVEL: logging level name (default info)
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_ALLOWED_ORIGINS = ["http://localhost:3000"]
DEFAULT_LOG_LEVEL = "info"
LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


@dataclass
class ServiceConfig:
    """Settings for running the todo service."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    allowed_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_config() -> ServiceConfig:
    """Build configuration from the environment.

    Raises:
        ValueError: If TODO_SERVICE_PORT is not a valid port number or
            TODO_SERVICE_LOG_LEVEL is not a known level.
    """
    raw_port = os.getenv("TODO_SERVICE_PORT", "")
    port = DEFAULT_PORT
    if raw_port:
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"TODO_SERVICE_PORT must be an integer, got {raw_port!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"TODO_SERVICE_PORT out of range: {port}")

    log_level = (os.getenv("TODO_SERVICE_LOG_LEVEL", "") or DEFAULT_LOG_LEVEL).lower()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"TODO_SERVICE_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    origins = _parse_origins(os.getenv("TODO_SERVICE_ALLOWED_ORIGINS", ""))

    return ServiceConfig(
        host=os.getenv("TODO_SERVICE_HOST", "") or DEFAULT_HOST,
        port=port,
        allowed_origins=origins or list(DEFAULT_ALLOWED_ORIGINS),
        log_level=log_level,
    )
