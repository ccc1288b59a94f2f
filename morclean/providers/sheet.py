"""Jobs sheet feed: a published Google Sheet CSV mapped to job events."""
from __future__ import annotations

import csv
import io
import logging
from typing import Any

import requests

from morclean.providers import SheetFetchError

LOGGER = logging.getLogger(__name__)

SHEET_HEADERS = (
    "date", "start", "end", "title", "client", "address", "notes",
    "client_phone", "service_type", "assigned_cleaner", "status", "price", "paid",
)
DEFAULT_TITLE = "Clean"


def parse_csv(text: str) -> list[dict[str, str]]:
    """Rows keyed by trimmed header. Blank rows are dropped, short rows padded with ""."""
    if not text:
        return []
    # csv handles quoted commas, quoted newlines and doubled quotes
    reader = csv.reader(io.StringIO(text, newline=""))
    rows = list(reader)
    if not rows:
        return []
    headers = [h.strip() for h in rows[0]]
    out: list[dict[str, str]] = []
    for cols in rows[1:]:
        if not any(c and c.strip() for c in cols):
            continue
        out.append({h: (cols[i] if i < len(cols) else "").strip() for i, h in enumerate(headers)})
    return out


def row_to_event(row: dict[str, str]) -> dict[str, Any]:
    tasks = row.get("tasks") or ""
    event: dict[str, Any] = {
        "date": row.get("date", ""),
        "start": row.get("start") or "",
        "end": row.get("end") or "",
        "title": (row.get("title") or "").strip() or DEFAULT_TITLE,
        "client": row.get("client") or "",
        "address": row.get("address") or "",
        "notes": row.get("notes") or "",
        "tasks": [t for t in tasks.split("|") if t],
    }
    # Columns written by the Square sync; only passed through when present.
    for key in ("id", "service_type", "client_phone", "assigned_cleaner", "status", "price", "paid"):
        if row.get(key):
            event[key] = row[key]
    return event


def fetch_sheet_events(url: str, timeout: float = 15.0) -> list[dict[str, Any]]:
    """Download the sheet CSV and return the ``events`` list served by ``/api/jobs``."""
    try:
        resp = requests.get(url, timeout=timeout, headers={"Cache-Control": "no-store"})
    except requests.RequestException as e:
        raise SheetFetchError(f"CSV fetch failed: {e}") from e
    if not resp.ok:
        raise SheetFetchError(f"CSV fetch failed {resp.status_code}")
    events = [row_to_event(r) for r in parse_csv(resp.text)]
    LOGGER.info("sheet rows=%s", len(events))
    return events
