# src/focusboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time: every value has a usable default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .timer.pomodoro import (
    DEFAULT_BREAK_MINUTES,
    DEFAULT_WORK_MINUTES,
    MAX_BREAK_MINUTES,
    MAX_WORK_MINUTES,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "FOCUSBOARD"

STORE_BACKENDS = ("sqlite", "memory")


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


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_minutes(name: str, default: int, upper: int) -> int:
    value = _env_int(name, default)
    if 1 <= value <= upper:
        return value
    logger.warning("%s=%s is outside 1..%s, using %s.", name, value, upper, default)
    return default


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

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data (ignored by git) ----
    data_dir: Path
    store_backend: str
    store_path: Path

    # ---- Pomodoro ----
    work_minutes: int
    break_minutes: int
    tick_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "focusboard") or "focusboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/focusboard"))
        store_backend = _env(_k("STORE_BACKEND"), "sqlite").strip().lower()
        if store_backend not in STORE_BACKENDS:
            store_backend = "sqlite"
        store_path = _env_path(_k("STORE_PATH"), data_dir / "store.sqlite3")

        work_minutes = _env_minutes(_k("WORK_MINUTES"), DEFAULT_WORK_MINUTES, MAX_WORK_MINUTES)
        break_minutes = _env_minutes(_k("BREAK_MINUTES"), DEFAULT_BREAK_MINUTES, MAX_BREAK_MINUTES)
        tick_seconds = _env_float(_k("TICK_SECONDS"), 1.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            store_backend=store_backend,
            store_path=store_path,
            work_minutes=work_minutes,
            break_minutes=break_minutes,
            tick_seconds=tick_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
