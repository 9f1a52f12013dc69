"""Date manipulation utilities"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple

from dateutil.relativedelta import relativedelta


def add_months(start: date, months: int) -> date:
    """Shift by calendar months, clamping to month end (Jan 31 + 1 -> Feb 28/29)"""
    return start + relativedelta(months=months)


def month_bounds(day: date) -> Tuple[date, date]:
    """First and last day of the month containing day"""
    first = day.replace(day=1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last


def at_midnight_utc(day: date, offset_days: int = 0) -> datetime:
    """Timestamp for a calendar day, optionally shifted by whole days"""
    return datetime.combine(day + timedelta(days=offset_days), time.min, tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
