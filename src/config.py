"""
Runtime configuration loaded from environment variables.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    allow_override: bool = False
    python_env: str = "production"
    log_level: str = "INFO"

    @property
    def debug(self) -> bool:
        return self.python_env == "development"


def _parse_port(raw: str | None) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except (ValueError, TypeError) as e:
        logger.warning(
            f"Invalid PORT value: {raw}. Error: {e}. Using default: {DEFAULT_PORT}"
        )
        return DEFAULT_PORT
    if not 0 < port < 65536:
        logger.warning(
            f"PORT value {port} is out of range. Using default: {DEFAULT_PORT}"
        )
        return DEFAULT_PORT
    return port


def load_settings() -> Settings:
    """Read settings from the current process environment."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_level not in _LOG_LEVELS:
        logger.warning(f"Invalid LOG_LEVEL value: {log_level}. Using default: INFO")
        log_level = "INFO"

    return Settings(
        port=_parse_port(os.getenv("PORT")),
        host=os.getenv("HOST", DEFAULT_HOST),
        allow_override=os.getenv("ALLOW_OVERRIDE", "").lower() == "true",
        python_env=os.getenv("PYTHON_ENV", "production").lower(),
        log_level=log_level,
    )
