"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

MATCH_MODES = ("name", "id")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Interpret environment variable values as positive integers."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "BudgetFlow"
    LOG_FILENAME = "budgetflow.log"
    LOG_MAX_BYTES = 10 * 1024 * 1024
    LOG_BACKUP_COUNT = 5

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("BUDGETFLOW_DEV_MODE", default=True)
        self.TOP_CATEGORIES = _env_int("BUDGETFLOW_TOP_CATEGORIES", 3)
        self.INSIGHT_LIMIT = _env_int("BUDGETFLOW_INSIGHT_LIMIT", 5)
        self.CATEGORY_MATCH = os.getenv("BUDGETFLOW_CATEGORY_MATCH", "name").strip().lower()
        if self.CATEGORY_MATCH not in MATCH_MODES:
            raise ValueError(
                f"BUDGETFLOW_CATEGORY_MATCH must be one of {MATCH_MODES}, got {self.CATEGORY_MATCH!r}"
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exported histories live."""

        data_root = os.getenv("BUDGETFLOW_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / ".local" / "share" / self.APP_NAME.lower()
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()


class DevConfig(BaseConfig):
    """Development configuration with verbose console logging."""

    DEBUG = True
    TESTING = False
