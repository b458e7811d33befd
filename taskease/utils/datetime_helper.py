"""Date/time helper functions"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from taskease import config


def app_timezone() -> ZoneInfo:
    """Time zone used for "today", summary hours and display"""
    return ZoneInfo(config.APP_TIMEZONE)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Make a datetime timezone-aware in UTC.

    Naive datetimes are interpreted as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def day_bounds(moment: datetime, days_ahead: int = 0) -> Tuple[datetime, datetime]:
    """
    Start (inclusive) and end (exclusive) of the local day containing
    `moment`, shifted by `days_ahead` days, returned in UTC.
    """
    local = moment.astimezone(app_timezone())
    start = local.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=days_ahead)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def format_date(dt: datetime) -> str:
    """Format as DD/MM/YYYY in the application time zone"""
    return dt.astimezone(app_timezone()).strftime("%d/%m/%Y")
