"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional


def truncate_to_day(value: Optional[date]) -> Optional[date]:
    """Drop the time-of-day part of a datetime (dates and None pass through)"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def subtract_days(from_dt: datetime, days: int) -> datetime:
    return from_dt - timedelta(days=days)


def subtract_months(from_dt: date, months: int) -> date:
    """Step back whole calendar months, clamping the day to the target month's length"""
    month_index = from_dt.year * 12 + (from_dt.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(from_dt.day, calendar.monthrange(year, month)[1])
    return from_dt.replace(year=year, month=month, day=day)
