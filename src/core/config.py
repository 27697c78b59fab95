"""Application settings (read from the environment, with safe defaults) and logging setup"""

import logging
import os


def positive_int_setting(name: str, default: int) -> int:
    """Read a whole number larger than zero from the environment, or fail loudly at import time."""
    raw_value = os.environ.get(name, str(default))
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a whole number, got {raw_value!r}") from exc
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


class Config:
    """Base configuration."""

    LOG_LEVEL = os.environ.get("CHESS_LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Upper limit on games kept in memory at the same time
    MAX_ACTIVE_GAMES = positive_int_setting("CHESS_MAX_ACTIVE_GAMES", 1000)


def configure_logging(level: str | None = None) -> None:
    """Set up the root logger. Call once from whatever process hosts the service."""
    logging.basicConfig(
        level=getattr(logging, level or Config.LOG_LEVEL, logging.INFO),
        format=Config.LOG_FORMAT,
    )
