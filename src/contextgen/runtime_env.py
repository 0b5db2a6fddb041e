"""Runtime environment loading helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

LOGGER = logging.getLogger(__name__)

DISABLE_DOTENV_ENV_VAR = "CONTEXTGEN_DISABLE_DOTENV"
_DISABLE_DOTENV_VALUES = {"1", "true", "yes", "on"}


def load_runtime_env(*, filename: str = ".env") -> Path | None:
    """Load the nearest .env at or above cwd; existing process variables win.

    Returns the file that was loaded.
    """
    if os.getenv(DISABLE_DOTENV_ENV_VAR, "").strip().lower() in _DISABLE_DOTENV_VALUES:
        return None

    found = find_dotenv(filename=filename, usecwd=True)
    if not found:
        return None

    load_dotenv(dotenv_path=found, override=False)
    LOGGER.debug("Loaded environment from %s", found)
    return Path(found)
