"""Shared utilities: datetime helpers."""

from reaper.shared.utils.datetime import ensure_utc, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
]
