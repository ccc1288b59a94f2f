from __future__ import annotations

from datetime import datetime

from fastapi import Depends

from morclean.board import load_jobs
from morclean.checklists.resolver import active_templates
from morclean.checklists.templates import TemplateSet
from morclean.config import Settings, load_settings
from morclean.core.normalize import JobRecord


def settings_dep() -> Settings:
    """FastAPI dependency returning the current :class:`Settings`.

    Override in tests with ``app.dependency_overrides[settings_dep]``.
    """
    return load_settings()


def templates_dep() -> TemplateSet:
    return active_templates()


def jobs_dep(settings: Settings = Depends(settings_dep)) -> list[JobRecord]:
    return load_jobs(settings)


def now_dep() -> datetime:
    # Local wall clock; windows compare calendar days in local time.
    return datetime.now()


__all__ = ["settings_dep", "templates_dep", "jobs_dep", "now_dep"]
