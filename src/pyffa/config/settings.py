"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)

_CURRENT_SEASON_ENV = "PYFFA_CURRENT_SEASON"
_MAX_WORKERS_ENV = "PYFFA_MAX_WORKERS"
_DB_PATH_ENV = "PYFFA_DB_PATH"
_MAX_SUGGESTIONS_ENV = "PYFFA_MAX_SUGGESTIONS"
_HISTORY_SIZE_ENV = "PYFFA_HISTORY_SIZE"
_RECENT_SIZE_ENV = "PYFFA_RECENT_SIZE"

CURRENT_SEASON_DEFAULT = 2024
MAX_WORKERS_DEFAULT = 8
DB_PATH_DEFAULT = "pyffa.sqlite"
MAX_SUGGESTIONS_DEFAULT = 5
HISTORY_SIZE_DEFAULT = 50
RECENT_SIZE_DEFAULT = 10


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class Settings:
    current_season: int = CURRENT_SEASON_DEFAULT
    max_workers: int = MAX_WORKERS_DEFAULT
    db_path: Path = Path(DB_PATH_DEFAULT)
    max_suggestions: int = MAX_SUGGESTIONS_DEFAULT
    history_size: int = HISTORY_SIZE_DEFAULT
    recent_size: int = RECENT_SIZE_DEFAULT


def load_settings() -> Settings:
    """Build settings from ``PYFFA_*`` variables, falling back to defaults."""

    db_path = os.getenv(_DB_PATH_ENV) or DB_PATH_DEFAULT
    return Settings(
        current_season=_env_int(_CURRENT_SEASON_ENV, CURRENT_SEASON_DEFAULT, min_value=1900),
        max_workers=_env_int(_MAX_WORKERS_ENV, MAX_WORKERS_DEFAULT, min_value=1),
        db_path=Path(db_path),
        max_suggestions=_env_int(_MAX_SUGGESTIONS_ENV, MAX_SUGGESTIONS_DEFAULT, min_value=1),
        history_size=_env_int(_HISTORY_SIZE_ENV, HISTORY_SIZE_DEFAULT, min_value=1),
        recent_size=_env_int(_RECENT_SIZE_ENV, RECENT_SIZE_DEFAULT, min_value=1),
    )
