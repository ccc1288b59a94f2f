from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, field_validator

LOGGER = logging.getLogger(__name__)

TEXT_FIELDS = (
    "id", "date", "start", "end", "client", "address", "title", "service_type", "notes",
    "client_phone", "assigned_cleaner", "status", "price", "paid",
)


class JobRecord(BaseModel):
    """One scheduled job as supplied by the job source.

    Every text field defaults to "" and non-string scalars are stringified, so
    consumers never have to guard against None. Unknown keys are ignored.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = ""
    date: str = ""
    start: str = ""
    end: str = ""
    client: str = ""
    address: str = ""
    title: str = ""
    service_type: str = ""
    notes: str = ""
    client_phone: str = ""
    assigned_cleaner: str = ""
    status: str = ""
    price: str = ""
    paid: str = ""
    tasks: tuple[str, ...] = ()

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        if isinstance(v, (int, float, bool)):
            return str(v)
        return ""

    @field_validator("tasks", mode="before")
    @classmethod
    def _coerce_tasks(cls, v: Any) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = v.split("|")
        if not isinstance(v, (list, tuple)):
            return ()
        return tuple(str(t).strip() for t in v if t is not None and str(t).strip())

    @property
    def classification_text(self) -> str:
        """service_type wins over title when it is filled in."""
        return self.service_type or self.title


def coerce_jobs(raw: Iterable[Any]) -> list[JobRecord]:
    jobs: list[JobRecord] = []
    dropped = 0
    for item in raw:
        if not isinstance(item, dict):
            dropped += 1
            continue
        jobs.append(JobRecord.model_validate(item))
    if dropped:
        LOGGER.warning("dropped %s job record(s) that were not objects", dropped)
    return jobs


def events_from_payload(payload: Any) -> list[JobRecord]:
    """Extract the job list from a ``{"events": [...]}`` body; anything malformed yields []."""
    if not isinstance(payload, dict):
        return []
    events = payload.get("events")
    if not isinstance(events, list):
        return []
    return coerce_jobs(events)
