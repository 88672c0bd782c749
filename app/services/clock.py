"""Conversions between stored UTC timestamps and the business calendar."""
from datetime import date, datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo


@lru_cache(maxsize=8)
def get_zone(tz_name: str):
    if not tz_name or tz_name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(tz_name)


def to_utc_naive(local: datetime, tz_name: str):
    if local is None:
        return None
    aware = local.replace(tzinfo=get_zone(tz_name))
    return aware.astimezone(timezone.utc).replace(tzinfo=None)


def local_range_to_utc(start: datetime, end: datetime, tz_name: str):
    return to_utc_naive(start, tz_name), to_utc_naive(end, tz_name)


def local_date(utc_naive: datetime, tz_name: str) -> date:
    return utc_naive.replace(tzinfo=timezone.utc).astimezone(get_zone(tz_name)).date()


def month_window(month: int, year: int, tz_name: str):
    """UTC bounds ``[start, end)`` of a local calendar month."""
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return local_range_to_utc(start, end, tz_name)
