"""Timestamp utilities for log records and KSUID wall-clock rendering."""

import time
from datetime import datetime, timezone

# Go reference layout "2006-01-02 15:04:05 -0700 MST", minus the year
_CLOCK_FORMAT_AFTER_YEAR = "%m-%d %H:%M:%S %z %Z"

# Calendar and weekdays repeat every 400 years (146097 days)
GREGORIAN_CYCLE_YEARS = 400
GREGORIAN_CYCLE_SECONDS = 146097 * 86400

# Well inside the datetime range so any zone offset still fits
_SHIFT_FROM = int(datetime(9000, 1, 1, tzinfo=timezone.utc).timestamp())


def now_micros():
    """Current time in microseconds since Unix epoch."""
    return int(time.time() * 1_000_000)


def format_timestamp(epoch_us=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_us is None:
        epoch_us = now_micros()

    dt = datetime.fromtimestamp(epoch_us / 1_000_000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"


def to_datetime(epoch_seconds, tz=None):
    """
    Aware datetime for whole epoch seconds.

    tz=None converts to the system local timezone. Raises ValueError or
    OverflowError past the datetime range (year 9999).
    """
    dt = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return dt.astimezone(tz) if tz is not None else dt.astimezone()


def format_clock_time(epoch_seconds, tz=None):
    """
    Render epoch seconds as e.g. '2017-10-10 04:00:47 +0000 UTC'.

    Instants past the datetime range are shifted back by whole Gregorian
    cycles, formatted, and given their real year back.
    """
    cycles = 0
    if epoch_seconds >= _SHIFT_FROM:
        cycles = (epoch_seconds - _SHIFT_FROM) // GREGORIAN_CYCLE_SECONDS + 1
    dt = to_datetime(epoch_seconds - cycles * GREGORIAN_CYCLE_SECONDS, tz)
    year = dt.year + cycles * GREGORIAN_CYCLE_YEARS
    return f"{year:04d}-" + dt.strftime(_CLOCK_FORMAT_AFTER_YEAR)
