"""Helpers for MySQL date/time values that arrive as raw bytes."""

from datetime import datetime, time

DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"


def parse_time_bytes(value: bytes | bytearray | str) -> time:
    """
    Parse a ``TIME`` column value such as ``b"15:04:05"`` or ``b"15:04:05.123"``.

    Raises ValueError for anything that is not a time of day.
    """
    s = value.decode("ascii") if isinstance(value, bytes | bytearray) else value
    s = s.strip()
    fmt = "%H:%M:%S.%f" if "." in s else "%H:%M:%S"
    return datetime.strptime(s, fmt).time()


def parse_datetime_bytes(value: bytes | bytearray | str) -> datetime:
    """Parse a ``DATETIME`` value in ``DATETIME_LAYOUT``."""
    s = value.decode("ascii") if isinstance(value, bytes | bytearray) else value
    return datetime.strptime(s.strip(), DATETIME_LAYOUT)
