"""Configuration management for Notekeep."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_float(key: str, default: float) -> float:
    """Get environment variable as float."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("%s=%r is not a valid number, using %s", key, value, default)
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


# Data directory (XDG-style, defaults to ~/.notekeep)
NOTEKEEP_DATA_DIR = Path(
    get_env("NOTEKEEP_DATA_DIR", os.path.expanduser("~/.notekeep"))
    or os.path.expanduser("~/.notekeep")
)

# Database path
DATABASE_PATH = Path(
    get_env("NOTEKEEP_DATABASE_PATH", str(NOTEKEEP_DATA_DIR / "notekeep.db"))
    or NOTEKEEP_DATA_DIR / "notekeep.db"
)

# Runtime environment: debug, testing or production
NOTEKEEP_ENV = (get_env("NOTEKEEP_ENV", "debug") or "debug").lower()

# Repository diagnostics (None means "use the environment preset")
REPOSITORY_LOGGING: bool | None = (
    get_env_bool("NOTEKEEP_REPOSITORY_LOGGING")
    if get_env("NOTEKEEP_REPOSITORY_LOGGING")
    else None
)
REPOSITORY_TIMEOUT: float | None = (
    get_env_float("NOTEKEEP_REPOSITORY_TIMEOUT", 10.0)
    if get_env("NOTEKEEP_REPOSITORY_TIMEOUT")
    else None
)

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO") or "INFO"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
    )
    return logging.getLogger("notekeep")
