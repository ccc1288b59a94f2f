"""Job board: fetched jobs, tagged, matched to a checklist and narrowed by window + search."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Optional

import requests

from morclean.checklists.resolver import resolve
from morclean.checklists.templates import DEFAULT_TEMPLATES, Template, TemplateSet
from morclean.config import Settings
from morclean.core.normalize import JobRecord, coerce_jobs, events_from_payload
from morclean.filters.rules import ServiceTag, classify
from morclean.filters.search import matches_search
from morclean.filters.window import WindowMode, in_window
from morclean.providers import ProviderError
from morclean.providers.sheet import fetch_sheet_events

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardEntry:
    job: JobRecord
    tag: ServiceTag
    checklist: Template

    def to_dict(self) -> dict:
        return {
            "job": self.job.model_dump(),
            "tag": self.tag.value,
            "checklist": self.checklist.to_dict(),
        }


def fetch_events(url: str, timeout: float = 15.0) -> list[JobRecord]:
    """GET a ``/api/jobs`` endpoint. Any failure is logged and yields []."""
    try:
        resp = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
        resp.raise_for_status()
        payload = resp.json()
    except (requests.RequestException, ValueError) as e:
        LOGGER.error("job fetch failed url=%s error=%s", url, e)
        return []
    return events_from_payload(payload)


def load_jobs(settings: Settings) -> list[JobRecord]:
    """Jobs from the configured source: a deployed /api/jobs first, else the sheet CSV."""
    if settings.jobs_api_url:
        return fetch_events(settings.jobs_api_url, timeout=settings.fetch_timeout)
    if not settings.jobs_csv_url:
        LOGGER.warning("no job source configured (set MORCLEAN_JOBS_API_URL or JOBS_CSV_URL)")
        return []
    try:
        events = fetch_sheet_events(settings.jobs_csv_url, timeout=settings.fetch_timeout)
    except ProviderError as e:
        LOGGER.error("job fetch failed source=sheet error=%s", e)
        return []
    return coerce_jobs(events)


def annotate(job: JobRecord, templates: TemplateSet = DEFAULT_TEMPLATES) -> BoardEntry:
    tag = classify(job.classification_text)
    return BoardEntry(job=job, tag=tag, checklist=resolve(tag, templates))


def build_board(
    jobs: Iterable[Any],
    *,
    now: date | datetime,
    mode: WindowMode = WindowMode.ALL,
    search: Optional[str] = None,
    templates: TemplateSet = DEFAULT_TEMPLATES,
) -> list[BoardEntry]:
    """Visible jobs in source order, each with its tag and checklist.

    Raw dicts are validated first; anything that is not a mapping is dropped.
    """
    records: list[JobRecord] = []
    for j in jobs:
        records.extend([j] if isinstance(j, JobRecord) else coerce_jobs([j]))

    entries = [
        annotate(j, templates)
        for j in records
        if in_window(j.date, now, mode) and matches_search(j, search)
    ]
    LOGGER.info(
        "board mode=%s search=%r fetched=%s visible=%s",
        mode.value,
        search or "",
        len(records),
        len(entries),
    )
    return entries
