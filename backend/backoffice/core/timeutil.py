# backoffice/core/timeutil.py
"""
Datetime helpers shared by the routers.
"""
import datetime as dt


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def iso_or_none(value: dt.datetime | None) -> str | None:
    """ISO 8601 string for the wire, None stays None."""
    return value.isoformat() if value else None
