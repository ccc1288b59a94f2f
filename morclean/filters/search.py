from __future__ import annotations

from typing import Any

SEARCH_FIELDS = ("client", "address", "title", "notes")


def _field(job: Any, name: str) -> str:
    value = job.get(name) if isinstance(job, dict) else getattr(job, name, None)
    return value if isinstance(value, str) else ""


def matches_search(job: Any, term: str | None) -> bool:
    """OR substring match of `term` across client, address, title and notes."""
    needle = (term or "").strip().lower()
    if not needle:
        return True
    return any(needle in _field(job, name).lower() for name in SEARCH_FIELDS)
