from __future__ import annotations

import logging
from enum import Enum

LOGGER = logging.getLogger(__name__)


class ServiceTag(str, Enum):
    STANDARD = "Standard"
    AIRBNB_TURNOVER = "AirbnbTurnover"
    DEEP_CLEAN = "DeepClean"
    MOVE_IN_OUT = "MoveInOut"
    POST_CONSTRUCTION = "PostConstruction"
    LISTING_PREP = "ListingPrep"
    OFFICE_COMMERCIAL = "OfficeCommercial"
    ONE_TIME = "OneTime"


# Order matters: first match wins. "Airbnb Deep Clean" is a turnover, not a deep clean.
# Plain substring containment, so "deepwater" still hits "deep".
SERVICE_RULES: tuple[tuple[ServiceTag, tuple[str, ...]], ...] = (
    (ServiceTag.AIRBNB_TURNOVER, ("airbnb", "turnover", "bnb")),
    (ServiceTag.POST_CONSTRUCTION, ("construction",)),
    (ServiceTag.MOVE_IN_OUT, ("move-in", "move in", "move out", "move-out")),
    (ServiceTag.LISTING_PREP, ("listing", "real estate")),
    (ServiceTag.OFFICE_COMMERCIAL, ("office", "commercial")),
    (ServiceTag.ONE_TIME, ("one time", "one-time")),
    (ServiceTag.DEEP_CLEAN, ("deep",)),
)


def classify(text: str | None) -> ServiceTag:
    """Map a free-form title / service type to its canonical tag (Standard if nothing matches)."""
    t = (text or "").lower()
    if not t:
        return ServiceTag.STANDARD
    for tag, keywords in SERVICE_RULES:
        for kw in keywords:
            if kw in t:
                LOGGER.debug("classified %r as %s (keyword=%r)", text, tag.value, kw)
                return tag
    return ServiceTag.STANDARD


def parse_tag(value: str | None) -> ServiceTag | None:
    """Case-insensitive lookup of a tag by its value; None when unknown."""
    v = (value or "").strip().lower()
    for tag in ServiceTag:
        if tag.value.lower() == v:
            return tag
    return None
