"""
Timezone utilities for Weekgrid.

Layout works on local wall-clock time only. Aware datetimes are converted
to the configured local timezone and stripped of their tzinfo; naive
datetimes are taken to be local already.
"""

from datetime import datetime
from typing import Optional
import time as _time
import pytz


# None means "use the system timezone"
_local_timezone_name: Optional[str] = None


def set_timezone(timezone_name: Optional[str]):
    """Set the local timezone for the application."""
    global _local_timezone_name
    _local_timezone_name = timezone_name


def get_local_timezone():
    """
    Get the local timezone as a pytz timezone object.

    Returns:
        pytz timezone object for the configured local timezone.
    """
    if _local_timezone_name:
        try:
            return pytz.timezone(_local_timezone_name)
        except pytz.UnknownTimeZoneError:
            pass
    # Fallback: try system timezone name
    try:
        return pytz.timezone(_time.tzname[0])
    except pytz.UnknownTimeZoneError:
        # Last resort: calculate offset and use fixed offset timezone
        is_dst = _time.localtime().tm_isdst
        if is_dst:
            offset_seconds = -_time.altzone
        else:
            offset_seconds = -_time.timezone
        return pytz.FixedOffset(offset_seconds // 60)


def to_local_naive(dt: datetime) -> datetime:
    """
    Convert a datetime to a naive local wall-clock datetime.

    Args:
        dt: An aware datetime (any zone) or a naive local datetime.

    Returns:
        A naive datetime (tzinfo=None) representing local time.
    """
    if dt.tzinfo is not None:
        local_dt = dt.astimezone(get_local_timezone())
        return local_dt.replace(tzinfo=None)
    return dt


def local_now() -> datetime:
    """Current local wall-clock time as a naive datetime."""
    return to_local_naive(datetime.now(pytz.UTC))
