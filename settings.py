"""Runtime configuration read from environment variables.

Values come from the process environment; ``main.py`` loads a ``.env``
file next to itself first. Invalid integers fall back to the default.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger("cleaner")


class Settings(BaseModel):
    """Service settings.

    ``auto_convert_threshold`` mirrors the browser client: inputs longer
    than this many characters are cleaned in chunked mode.
    """

    model_config = ConfigDict(frozen=True)

    log_level: str = "INFO"
    auto_convert_threshold: int = 5000
    chunk_size: int = 100
    max_input_chars: int = 5_000_000


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %d", name, raw, default)
        return default
    if value < minimum:
        logger.warning("%s=%d is below %d, using default %d", name, value, minimum, default)
        return default
    return value


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name, default).strip().upper()
    if raw not in _LOG_LEVELS:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default
    return raw


def load_settings() -> Settings:
    """Build ``Settings`` from the current environment."""
    return Settings(
        log_level=_env_log_level("CLEANER_LOG_LEVEL", "INFO"),
        auto_convert_threshold=_env_int("CLEANER_AUTO_CONVERT_THRESHOLD", 5000),
        chunk_size=_env_int("CLEANER_CHUNK_SIZE", 100, minimum=1),
        max_input_chars=_env_int("CLEANER_MAX_INPUT_CHARS", 5_000_000, minimum=1),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()
