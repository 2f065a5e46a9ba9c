import logging
from os import getenv

STRICT_BOUNDS_ENV = "BITBLOOM_STRICT_BOUNDS"
LOG_LEVEL_ENV = "BITBLOOM_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
TRUTHY = {"1", "true", "yes", "on"}


def strict_bounds() -> bool:
    """Whether bit offsets are always range checked, even under python -O"""
    return getenv(STRICT_BOUNDS_ENV, "").strip().lower() in TRUTHY


def log_level() -> int:
    name = getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"{LOG_LEVEL_ENV} has unknown level {name!r}")
    return level


def configure_logging() -> logging.Logger:
    # The library never installs handlers; this only sets the package level.
    logger = logging.getLogger("bitbloom")
    logger.setLevel(log_level())
    return logger
