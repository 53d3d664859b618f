# src/taskpage/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Bad values fall back to defaults instead of failing at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ENV_PREFIX = "TASKPAGE"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int, *, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


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
    data_dir: Path

    # ---- Parsing ----
    parse_cache_size: int

    # ---- Editing ----
    display_date_format: str
    extra_bullets: List[str]

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskpage") or "taskpage"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskpage"))

        parse_cache_size = _env_int(_k("PARSE_CACHE_SIZE"), 512, minimum=1)

        display_date_format = _env(_k("DATE_FORMAT"), "ddd, D MMM YYYY")
        # Only single characters make sense as bullet markers.
        extra_bullets = [b for b in _env_list(_k("EXTRA_BULLETS"), []) if len(b) == 1]

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            parse_cache_size=parse_cache_size,
            display_date_format=display_date_format,
            extra_bullets=extra_bullets,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
