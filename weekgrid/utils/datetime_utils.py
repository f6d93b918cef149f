"""
Calendar helpers for the Sunday-first week grid.

Dates are handled as naive wall-clock values of the configured timezone;
keys are the string forms stored in the Range Store.
"""

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

SHORT_DOW = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def now_local(timezone_name: Optional[str] = None) -> datetime:
    """
    Get the current wall-clock time.

    Args:
        timezone_name: IANA timezone name (e.g., "Asia/Tokyo"); empty or None
            means the host's local time

    Returns:
        datetime: Naive datetime expressed in the requested timezone
    """
    if timezone_name:
        return datetime.now(ZoneInfo(timezone_name)).replace(tzinfo=None)
    return datetime.now()


def sunday_index(value: date) -> int:
    """Weekday index with Sunday=0 ... Saturday=6."""
    return (value.weekday() + 1) % 7


def start_of_week(value: date) -> date:
    """Sunday on or before the given date."""
    if isinstance(value, datetime):
        value = value.date()
    return value - timedelta(days=sunday_index(value))


def format_date_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def format_week_key(first_day: date) -> str:
    return format_date_key(first_day)


def format_week_title(first_day: date) -> str:
    """
    Human-readable range for the week starting at ``first_day``.

    Example:
        >>> format_week_title(date(2025, 3, 9))
        'Mar 9 – 15, 2025'
        >>> format_week_title(date(2024, 12, 29))
        'Dec 29, 2024 – Jan 4, 2025'
    """
    last_day = first_day + timedelta(days=6)
    first_month = MONTH_ABBR[first_day.month - 1]
    last_month = MONTH_ABBR[last_day.month - 1]
    if first_day.year == last_day.year:
        if first_day.month == last_day.month:
            return f"{first_month} {first_day.day} – {last_day.day}, {first_day.year}"
        return (
            f"{first_month} {first_day.day} – {last_month} {last_day.day}, "
            f"{first_day.year}"
        )
    return (
        f"{first_month} {first_day.day}, {first_day.year} – "
        f"{last_month} {last_day.day}, {last_day.year}"
    )


def hour_stamps() -> list[str]:
    return [f"{hour:02d}:00" for hour in range(24)]
