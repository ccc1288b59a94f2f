"""Square bookings -> jobs sheet rows.

Pulls bookings for a window around today, looks up each customer, and flattens
every booking into one row with the ``SHEET_HEADERS`` columns so the sheet
feed can serve it.
"""
from __future__ import annotations

import csv
import logging
from datetime import datetime, time, timedelta, timezone
from pathlib import Path
from typing import Any, Iterable, Optional, Union
from urllib.parse import quote
from zoneinfo import ZoneInfo

import requests

from morclean.config import Settings
from morclean.providers import SquareError
from morclean.providers.sheet import DEFAULT_TITLE, SHEET_HEADERS

LOGGER = logging.getLogger(__name__)

SQUARE_BASE_URL = "https://connect.squareup.com/v2"
PAGE_LIMIT = 200
DEFAULT_DURATION_MIN = 120


class SquareClient:
    def __init__(
        self,
        access_token: str,
        version: str,
        timeout: float = 20.0,
        session: Optional[requests.Session] = None,
        base_url: str = SQUARE_BASE_URL,
    ):
        if not access_token or not access_token.startswith("EAAA"):
            raise SquareError("Missing or invalid Square access token (must be Production and start with EAAA).")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {access_token}",
            "Square-Version": version,
            "Content-Type": "application/json",
        })
        self._customers: dict[str, Optional[dict]] = {}

    def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise SquareError(f"Square request failed: {e}") from e
        LOGGER.debug("GET %s -> %s", url, resp.status_code)

        if 200 <= resp.status_code < 300:
            try:
                return resp.json()
            except ValueError as e:
                raise SquareError("Square JSON parse error") from e

        msg = f"HTTP {resp.status_code}"
        try:
            body = resp.json()
            if isinstance(body, dict) and body.get("errors"):
                msg = str(body["errors"])
        except ValueError:
            pass
        raise SquareError(f"Square API error: {msg}")

    def list_bookings(self, start_at_min: datetime, start_at_max: datetime, location_id: str = "") -> list[dict]:
        params: dict[str, Any] = {
            "limit": PAGE_LIMIT,
            "start_at_min": start_at_min.isoformat(),
            "start_at_max": start_at_max.isoformat(),
        }
        if location_id:
            params["location_id"] = location_id

        bookings: list[dict] = []
        cursor = None
        while True:
            page_params = dict(params, cursor=cursor) if cursor else params
            data = self._get("bookings", page_params)
            if data.get("errors"):
                raise SquareError(f"Square API error: {data['errors']}")
            if isinstance(data.get("bookings"), list):
                bookings.extend(data["bookings"])
            cursor = data.get("cursor")
            if not cursor:
                break
        return bookings

    def fetch_customer(self, customer_id: str) -> Optional[dict]:
        if not customer_id:
            return None
        if customer_id not in self._customers:
            data = self._get(f"customers/{quote(customer_id, safe='')}")
            self._customers[customer_id] = data.get("customer") if isinstance(data, dict) else None
        return self._customers[customer_id]


def display_name_from_customer(c: Optional[dict]) -> str:
    if not c:
        return ""
    full = " ".join(p for p in (c.get("given_name"), c.get("family_name")) if p).strip()
    return full or c.get("company_name") or ""


def phone_from_customer(c: Optional[dict]) -> str:
    if not c or not isinstance(c.get("phone_numbers"), list):
        return ""
    for p in c["phone_numbers"]:
        if p:
            return (p.get("phone_number") or "") if isinstance(p, dict) else ""
    return ""


def format_address(a: Optional[dict]) -> str:
    if not a:
        return ""
    locality = ", ".join(p for p in (a.get("locality"), a.get("administrative_district_level_1")) if p)
    parts = [
        (a.get("address_line_1") or "").strip(),
        (a.get("address_line_2") or "").strip(),
        locality,
        (a.get("postal_code") or "").strip(),
    ]
    return " • ".join(p for p in parts if p)


def _first_segment(booking: dict) -> dict:
    segments = booking.get("appointment_segments") or []
    return segments[0] if segments and isinstance(segments[0], dict) else {}


def service_name(booking: dict) -> str:
    seg = _first_segment(booking)
    variation = seg.get("service_variation") or {}
    return variation.get("name") or seg.get("service_variation_id") or DEFAULT_TITLE


def duration_minutes(booking: dict) -> int:
    seg = _first_segment(booking)
    version = seg.get("service_variation_version") or {}
    return int(version.get("duration_minutes") or seg.get("duration_minutes") or DEFAULT_DURATION_MIN)


def _parse_start(value: Any) -> datetime:
    try:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as e:
        raise SquareError(f"Square booking has invalid start_at: {value!r}") from e
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def booking_to_row(booking: dict, customer: Optional[dict], tz: ZoneInfo) -> list[str]:
    """One sheet row in SHEET_HEADERS order."""
    name = service_name(booking)
    start_at = _parse_start(booking["start_at"]).astimezone(tz)
    end_at = start_at + timedelta(minutes=duration_minutes(booking))
    return [
        start_at.date().isoformat(),          # date
        start_at.strftime("%H:%M"),           # start
        end_at.strftime("%H:%M"),             # end
        name,                                 # title
        display_name_from_customer(customer), # client
        format_address(booking.get("address")),
        "",                                   # notes
        phone_from_customer(customer),
        name,                                 # service_type
        "",                                   # assigned_cleaner
        booking.get("status") or "",
        "",                                   # price
        "",                                   # paid
    ]


def sync_window(now: datetime, tz: ZoneInfo, days_past: int, days_ahead: int) -> tuple[datetime, datetime]:
    """[start of today - days_past, end of today + days_ahead] in `tz`."""
    local = now.astimezone(tz) if now.tzinfo else now.replace(tzinfo=tz)
    day = local.date()
    start = datetime.combine(day, time.min, tzinfo=tz) - timedelta(days=days_past)
    end = datetime.combine(day, time(23, 59, 59), tzinfo=tz) + timedelta(days=days_ahead)
    return start, end


def sync_bookings(
    settings: Settings,
    *,
    now: Optional[datetime] = None,
    client: Optional[SquareClient] = None,
) -> list[list[str]]:
    tz = ZoneInfo(settings.square_timezone)
    client = client or SquareClient(settings.square_access_token, settings.square_version)
    start, end = sync_window(now or datetime.now(timezone.utc), tz, settings.square_days_past, settings.square_days_ahead)

    bookings = client.list_bookings(start, end, settings.square_location_id)
    LOGGER.info("square bookings=%s window=%s..%s", len(bookings), start.date(), end.date())

    rows = []
    for b in bookings:
        if not b.get("start_at"):
            LOGGER.warning("skipping booking without start_at id=%s", b.get("id"))
            continue
        customer = client.fetch_customer(b.get("customer_id") or "")
        rows.append(booking_to_row(b, customer, tz))
    return rows


def write_rows_csv(rows: Iterable[list[str]], path: Union[str, Path]) -> int:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(SHEET_HEADERS)
        for row in rows:
            writer.writerow(row)
            count += 1
    return count
