# src/tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is read from the environment at import time except the .env file.
- Settings are injectable: bootstrap accepts any object with the same attributes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

STORAGE_SQLITE = "sqlite"
STORAGE_MEMORY = "memory"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, default: str, choices: set[str]) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    return value if value in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    storage: str
    storage_key: str
    data_dir: Path
    db_path: Path

    # ---- Console ----
    color: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist").strip() or "tasklist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        storage = _env_choice(_k("STORAGE"), STORAGE_SQLITE, {STORAGE_SQLITE, STORAGE_MEMORY})
        storage_key = _env(_k("STORAGE_KEY"), "todos").strip() or "todos"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "tasklist.sqlite3")

        # NO_COLOR (https://no-color.org) wins over our own switch.
        color = _env_bool(_k("COLOR"), True) and os.getenv("NO_COLOR") is None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            storage=storage,
            storage_key=storage_key,
            data_dir=data_dir,
            db_path=db_path,
            color=color,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
