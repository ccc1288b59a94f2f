"""Environment-driven settings for the checklist viewer.

Environment variables (all optional)
------------------------------------
JOBS_CSV_URL:
    Published Google Sheet CSV that backs ``GET /api/jobs``.
MORCLEAN_JOBS_API_URL:
    A deployed ``/api/jobs`` endpoint; when set, the board reads from it
    instead of the sheet.
MORCLEAN_FETCH_TIMEOUT (float, default 15)
MORCLEAN_TEMPLATES_FILE:
    YAML file replacing the built-in checklist templates.
MORCLEAN_LOG_LEVEL (default "INFO")
SQUARE_ACCESS_TOKEN / SQUARE_LOCATION_ID / SQUARE_TIMEZONE /
SQUARE_DAYS_PAST / SQUARE_DAYS_AHEAD / SQUARE_VERSION:
    Square bookings sync.
SUPABASE_URL / SUPABASE_ANON_KEY:
    Storage backend for photo uploads. Read here, not used by the core yet.

MORCLEAN_DOTENV (path to .env, default ".env") is loaded on import.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml
from dotenv import load_dotenv

_ = load_dotenv(dotenv_path=os.getenv("MORCLEAN_DOTENV", ".env"))

# Square enforces a 30 day max window on booking searches
SQUARE_MAX_DAYS_AHEAD = 30


@dataclass(frozen=True)
class Settings:
    jobs_csv_url: str = ""
    jobs_api_url: str = ""
    fetch_timeout: float = 15.0
    templates_file: str = ""
    log_level: str = "INFO"
    square_access_token: str = ""
    square_location_id: str = ""
    square_timezone: str = "America/New_York"
    square_days_past: int = 0
    square_days_ahead: int = SQUARE_MAX_DAYS_AHEAD
    square_version: str = "2025-08-20"
    supabase_url: str = ""
    supabase_anon_key: str = ""

    @property
    def storage_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def load_settings() -> Settings:
    days_ahead = min(_int_env("SQUARE_DAYS_AHEAD", SQUARE_MAX_DAYS_AHEAD), SQUARE_MAX_DAYS_AHEAD)
    return Settings(
        jobs_csv_url=os.getenv("JOBS_CSV_URL", ""),
        jobs_api_url=os.getenv("MORCLEAN_JOBS_API_URL", ""),
        fetch_timeout=float(os.getenv("MORCLEAN_FETCH_TIMEOUT", "15")),
        templates_file=os.getenv("MORCLEAN_TEMPLATES_FILE", ""),
        log_level=os.getenv("MORCLEAN_LOG_LEVEL", "INFO").upper(),
        square_access_token=os.getenv("SQUARE_ACCESS_TOKEN", ""),
        square_location_id=os.getenv("SQUARE_LOCATION_ID", ""),
        square_timezone=os.getenv("SQUARE_TIMEZONE", "America/New_York"),
        square_days_past=_int_env("SQUARE_DAYS_PAST", 0),
        square_days_ahead=days_ahead,
        square_version=os.getenv("SQUARE_VERSION", "2025-08-20"),
        supabase_url=os.getenv("SUPABASE_URL", ""),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY", ""),
    )


def load_yaml_file(path: Union[str, Path]) -> dict[str, Any]:
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data
