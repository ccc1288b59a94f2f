from .rules import ServiceTag, classify, parse_tag
from .search import matches_search
from .window import WindowMode, in_window, parse_mode, week_start

__all__ = [
    "ServiceTag",
    "classify",
    "parse_tag",
    "matches_search",
    "WindowMode",
    "in_window",
    "parse_mode",
    "week_start",
]
