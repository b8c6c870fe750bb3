"""
Connection handles for named databases: opening engines and the name registry.

No driver layer: pymysql / psycopg are installed via pip and picked by dialect.
"""

from .connect import ConnectionOptions, build_url, health_check, open_connection
from .registry import ConnectionRegistry

__all__ = [
    "ConnectionOptions",
    "ConnectionRegistry",
    "build_url",
    "health_check",
    "open_connection",
]
