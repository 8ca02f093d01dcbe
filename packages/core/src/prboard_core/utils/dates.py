from __future__ import annotations

from datetime import datetime, timezone


def parse_timestamp(value: str | datetime) -> datetime:
    """Return an aware UTC datetime for an ISO-8601 string or a datetime.

    GitHub returns timestamps like ``2024-05-01T12:00:00Z``; naive datetimes
    (PyGithub on older releases) are assumed to be UTC.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_time_ago(when: datetime, now: datetime | None = None) -> str:
    """Render the distance between ``when`` and ``now`` in words."""
    now = now or datetime.now(timezone.utc)
    seconds = int((now - when).total_seconds())
    future = seconds < 0
    seconds = abs(seconds)

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 45:
        return "just now"
    if minutes < 2:
        text = "1 minute"
    elif minutes < 45:
        text = f"{minutes} minutes"
    elif hours < 2:
        text = "about 1 hour"
    elif hours < 24:
        text = f"about {hours} hours"
    elif days < 2:
        text = "1 day"
    elif days < 30:
        text = f"{days} days"
    elif days < 60:
        text = "about 1 month"
    elif days < 365:
        text = f"{days // 30} months"
    elif days < 730:
        text = "about 1 year"
    else:
        text = f"{days // 365} years"
    return f"in {text}" if future else f"{text} ago"
