from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum

from morclean.core.date_parse import parse_job_date


class WindowMode(str, Enum):
    TODAY = "Today"
    THIS_WEEK = "ThisWeek"
    ALL = "All"


_MODE_ALIASES = {
    "today": WindowMode.TODAY,
    "thisweek": WindowMode.THIS_WEEK,
    "this_week": WindowMode.THIS_WEEK,
    "this-week": WindowMode.THIS_WEEK,
    "week": WindowMode.THIS_WEEK,
    "all": WindowMode.ALL,
}


def parse_mode(value: str | WindowMode | None) -> WindowMode:
    if isinstance(value, WindowMode):
        return value
    key = (value or "").strip().lower()
    if not key:
        return WindowMode.ALL
    try:
        return _MODE_ALIASES[key]
    except KeyError:
        raise ValueError(f"unknown window mode: {value!r}") from None


def _local_day(value: date | datetime) -> date:
    # A datetime keeps its own wall-clock date; no UTC normalization.
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(now: date | datetime) -> date:
    """Most recent Sunday at or before `now`."""
    day = _local_day(now)
    # weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def in_window(job_date: str | date | datetime | None, now: date | datetime, mode: WindowMode) -> bool:
    """Return True if a job dated `job_date` belongs in the `mode` view as of `now`.

    ThisWeek is the Sunday-aligned calendar week [Sunday, next Sunday).
    Undated or unparseable jobs only show up under All.
    """
    if mode is WindowMode.ALL:
        return True

    if isinstance(job_date, (date, datetime)):
        day = _local_day(job_date)
    else:
        day = parse_job_date(job_date)
    if day is None:
        return False

    today = _local_day(now)
    if mode is WindowMode.TODAY:
        return day == today

    start = week_start(today)
    return start <= day < start + timedelta(days=7)
