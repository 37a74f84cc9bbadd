"""
core/formatting.py
------------------
Small display helpers shared by the backend and the Streamlit pages.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional
from urllib.parse import quote

DAY_SECONDS = 24 * 60 * 60


def parse_timestamp(value: Optional[str]) -> Optional[dt.datetime]:
    """Parse an ISO timestamp as UTC-aware; None if empty or malformed."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = dt.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def time_ago(timestamp: Optional[str], now: Optional[dt.datetime] = None) -> str:
    """
    Coarse relative age of an ISO timestamp.

    Months are 30 days and years 365 days; calendar lengths are ignored.
    """
    when = parse_timestamp(timestamp)
    if when is None:
        return "Unknown"
    now = now or dt.datetime.now(dt.timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)

    # clock skew: future timestamps count as today
    days = max(int((now - when).total_seconds() // DAY_SECONDS), 0)
    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 365:
        return f"{days // 30} months ago"
    return f"{days // 365} years ago"


def format_date(timestamp: Optional[str]) -> str:
    when = parse_timestamp(timestamp)
    return when.date().isoformat() if when else "—"


def format_file_size(size: Optional[int]) -> str:
    """Human-readable byte count (one decimal above bytes)."""
    if size is None:
        return "—"
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{int(value)} B" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def user_initials(email: Optional[str]) -> str:
    if not email:
        return "U"
    return email.split("@")[0][:2].upper() or "U"


def avatar_url(name: str, size: int = 128) -> str:
    return (
        f"https://ui-avatars.com/api/?name={quote(name or '')}"
        f"&background=4f46e5&color=fff&size={size}"
    )
