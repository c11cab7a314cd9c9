"""
Helpers for rendering timestamps and counts the way the dashboard displays them.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd


def _localize(v, tz: str) -> Optional[pd.Timestamp]:
    if v is None or pd.isna(v):
        return None
    try:
        ts = pd.Timestamp(v)
    except (TypeError, ValueError):
        return None
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.tz_convert(tz)


def format_datetime(v, tz: str = "UTC") -> str:
    """Month/day/year plus 12-hour time, e.g. ``1/5/2024 2:30 PM``."""
    ts = _localize(v, tz)
    if ts is None:
        return "N/A"
    return f"{format_date(ts, tz)} {format_time(ts, tz)}"


def format_date(v, tz: str = "UTC") -> str:
    ts = _localize(v, tz)
    if ts is None:
        return "N/A"
    return f"{ts.month}/{ts.day}/{ts.year}"


def format_time(v, tz: str = "UTC", seconds: bool = False) -> str:
    ts = _localize(v, tz)
    if ts is None:
        return "N/A"
    hour = ts.hour % 12 or 12
    suffix = "AM" if ts.hour < 12 else "PM"
    if seconds:
        return f"{hour}:{ts.minute:02d}:{ts.second:02d} {suffix}"
    return f"{hour}:{ts.minute:02d} {suffix}"


def format_count(v: Optional[float]) -> str:
    if v is None or pd.isna(v):
        return "N/A"
    try:
        return f"{int(v):,}"
    except (TypeError, ValueError):
        return "N/A"
