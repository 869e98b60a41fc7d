"""Utility helper functions."""

from app.utils.helpers import get_summary, host, slugify, today_str, utc_now
from app.utils.ids import as_id_set, id_str

__all__ = [
    "as_id_set",
    "get_summary",
    "host",
    "id_str",
    "slugify",
    "today_str",
    "utc_now",
]
