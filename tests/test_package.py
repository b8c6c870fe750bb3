"""Top-level package exports."""

from datetime import time

import emixdb


def test_time_helpers_exported() -> None:
    assert "parse_time_bytes" in emixdb.__all__
    assert "parse_datetime_bytes" in emixdb.__all__
    assert emixdb.parse_time_bytes(b"15:04:05") == time(15, 4, 5)
