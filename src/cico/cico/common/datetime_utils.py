from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a Postgres/ISO-8601 timestamp into an aware datetime.

    Supabase returns `timestamptz` values such as `2026-01-31T08:30:00+00:00`
    or with a trailing `Z`; naive values are assumed to be UTC.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def format_duration(minutes: Optional[int]) -> str:
    if not minutes:
        return "0h 0m"
    minutes = int(minutes)
    return f"{minutes // 60}h {minutes % 60}m"


def format_time(value: datetime) -> str:
    return value.strftime("%I:%M %p")


def format_date(value: datetime | date) -> str:
    return f"{value.strftime('%a, %b')} {value.day}, {value.year}"
