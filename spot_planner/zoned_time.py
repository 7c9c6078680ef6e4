"""
Conversions between absolute instants and local calendar/clock time.

pandas does the daylight saving bookkeeping: localizing a wall-clock time that
occurs twice (autumn) or never (spring) is resolved explicitly instead of
raising.
"""

from datetime import time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pandas as pd

from spot_planner.exceptions import ConfigurationError


def resolve_time_zone(name):
    """Return the ZoneInfo for an IANA identifier such as "Europe/Amsterdam"."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
        raise ConfigurationError(f"Unknown local time zone {name!r}") from e


def to_zoned(instant, zone):
    """
    Convert an aware instant to the given zone.

    Returns
    -------
    pd.Timestamp
        Localized timestamp; ``.date()``, ``.time()`` and ``.weekday()`` give
        the local calendar date, clock time and weekday.
    """
    return pd.Timestamp(instant).tz_convert(zone)


def combine(date, time_of_day, zone, earliest=True):
    """
    Combine a local date and clock time into an instant in ``zone``.

    Parameters
    ----------
    date : datetime.date
    time_of_day : datetime.time
    zone : tzinfo
    earliest : bool
        For a wall-clock time that occurs twice, pick the first occurrence
        (True) or the second (False). Times skipped by a spring-forward
        transition move forward to the first valid instant.
    """
    naive = pd.Timestamp.combine(date, time_of_day)
    return naive.tz_localize(zone, ambiguous=earliest, nonexistent="shift_forward")


def start_of_next_day(date, zone):
    """Local midnight at the start of the day after ``date``."""
    return combine(date + timedelta(days=1), time(0, 0), zone, earliest=False)
