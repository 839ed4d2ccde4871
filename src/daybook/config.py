# src/daybook/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is read from disk at import time except the optional .env file.
- Every consumer accepts an injected settings object; get_settings() is the default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "DAYBOOK"


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


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Front-end ----
    console_enabled: bool

    # ---- Persistence ----
    persist_enabled: bool
    data_dir: Path
    storage_path: Path
    storage_key: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "daybook").strip() or "daybook"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        persist_enabled = _env_bool(_k("PERSIST_ENABLED"), True)
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/daybook"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "local_storage.json")
        storage_key = _env(_k("STORAGE_KEY"), "todoTasks").strip() or "todoTasks"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            persist_enabled=persist_enabled,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_key=storage_key,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
