"""
Low-level timezone and timestamp utilities.

MATCH WEEK CONVENTION:
A Hattrick match week is anchored on Friday 00:00 UTC. The current
period starts on the most recent Friday (today, when today is a Friday)
and lasts seven days. Every "this week" computation in the service goes
through ``match_week_bounds`` so the matches query and the player
activity flag agree on which matches count.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

FRIDAY = 4  # date.weekday()

CHPP_DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d")


def now_utc() -> datetime:
    """Return the current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo) and convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def date_to_utc_datetime(day: date) -> datetime:
    """Convert a date to a timezone-aware UTC datetime at midnight."""
    return datetime.combine(day, datetime.min.time()).replace(tzinfo=timezone.utc)


def last_friday_utc(now: datetime | None = None) -> datetime:
    """Return midnight UTC of the most recent Friday, including today."""
    current = ensure_utc(now) if now else now_utc()
    days_since_friday = (current.weekday() - FRIDAY) % 7
    return date_to_utc_datetime(current.date() - timedelta(days=days_since_friday))


def match_week_bounds(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return the (start, end) of the current match week; end is exclusive."""
    start = last_friday_utc(now)
    return start, start + timedelta(days=7)


def parse_chpp_datetime(value: str | None) -> datetime | None:
    """Parse a CHPP date string ("2024-03-16 15:00:00") as a UTC datetime.

    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    text = str(value).strip()
    for fmt in CHPP_DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        return None
