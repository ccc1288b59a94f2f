from __future__ import annotations

from datetime import date
import re

# Sheet rows carry plain dates; some exports append a time ("2025-09-14T09:00" / "2025-09-14 09:00:00Z").
ISO_DATE = re.compile(
    r"^(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:[T ]\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)
US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def parse_job_date(text: str | None) -> date | None:
    """Parse a job's calendar date. Returns None for anything unparseable."""
    if not text or not isinstance(text, str):
        return None
    raw = text.strip()
    if not raw:
        return None

    m = ISO_DATE.match(raw)
    if m:
        year, month, day = map(int, m.groups())
    else:
        m = US_DATE.match(raw)
        if not m:
            return None
        month, day, year = map(int, m.groups())

    try:
        return date(year, month, day)
    except ValueError:
        return None
