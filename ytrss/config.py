"""Environment loading and required settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_environment(path: str | os.PathLike[str] = ".env") -> bool:
    """Load variables from a dotenv file without overriding existing ones.

    Returns whether the file was found; a missing file only logs a warning.
    """
    env_file = Path(path)
    if not env_file.is_file():
        logger.warning("Warning: .env file not found")
        return False
    load_dotenv(env_file, override=False)
    return True


def session_key() -> str:
    """Return the session signing key from SESSION_KEY, which must be set."""
    key = os.environ.get("SESSION_KEY", "")
    if not key:
        raise RuntimeError(
            "SESSION_KEY environment variable not set. "
            "Please set it to a random 32-byte string."
        )
    return key