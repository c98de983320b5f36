# core/dates.py
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from lovejourney.core.exceptions import ValidationError


def resolve_timezone(name: Optional[str], fallback: str = "UTC") -> ZoneInfo:
    """Return a ZoneInfo for `name`, or `fallback` when `name` is empty."""
    try:
        return ZoneInfo(name or fallback)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name}")


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes read back from SQLite are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_local_date(value: datetime, tz: ZoneInfo) -> date:
    return ensure_utc(value).astimezone(tz).date()


def local_day_bounds(day: date, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """UTC [start, end) of the calendar day `day` in `tz`."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def local_today(tz: ZoneInfo) -> date:
    return datetime.now(tz).date()


def distinct_local_dates(timestamps: List[datetime], tz: ZoneInfo) -> List[date]:
    """Local dates of `timestamps`, deduplicated, order preserved."""
    seen: List[date] = []
    for ts in timestamps:
        day = to_local_date(ts, tz)
        if day not in seen:
            seen.append(day)
    return seen
