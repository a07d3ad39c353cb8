"""
Time helpers.

Timestamps are persisted as naive UTC. Calendar questions ("what is today",
"which day does this log belong to") are answered in the configured zone.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple

import pytz


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_zone(tz_name: str):
    try:
        return pytz.timezone(tz_name or "UTC")
    except pytz.UnknownTimeZoneError:
        return pytz.UTC


def to_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.UTC).replace(tzinfo=None)


def local_today(tz_name: str) -> date:
    return datetime.now(pytz.UTC).astimezone(get_zone(tz_name)).date()


def local_date(value: datetime, tz_name: str) -> date:
    """Calendar date of a stored timestamp in the given zone."""
    if value.tzinfo is None:
        value = pytz.UTC.localize(value)
    return value.astimezone(get_zone(tz_name)).date()


def day_bounds(day: date, tz_name: str) -> Tuple[datetime, datetime]:
    """Naive-UTC [start, end) range covering `day` in the given zone."""
    zone = get_zone(tz_name)
    start = zone.localize(datetime.combine(day, time.min))
    end = zone.localize(datetime.combine(day + timedelta(days=1), time.min))
    return to_utc_naive(start), to_utc_naive(end)


def days_ago(days: int) -> datetime:
    return utcnow() - timedelta(days=days)
