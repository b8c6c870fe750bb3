"""
emixdb: named database connections from YAML, and pagination over raw SQL.
"""

from emixdb.bootstrap import Reload, prepare_reload, setup_from_file
from emixdb.core.config import configure_logging, settings
from emixdb.core.db_config import DbConfig, find_config_file, load_db_configs
from emixdb.core.errors import (
    ConfigFileError,
    EmixDbError,
    EmptyConnectionStringError,
    EmptyNameError,
    FatalConfigError,
    NoRowsError,
)
from emixdb.core.pool import (
    ConnectionOptions,
    ConnectionRegistry,
    health_check,
    open_connection,
)
from emixdb.core.timeutil import parse_datetime_bytes, parse_time_bytes
from emixdb.pagination import CountResult, Page, Pager, new_pager

__all__ = [
    "ConfigFileError",
    "ConnectionOptions",
    "ConnectionRegistry",
    "CountResult",
    "DbConfig",
    "EmixDbError",
    "EmptyConnectionStringError",
    "EmptyNameError",
    "FatalConfigError",
    "NoRowsError",
    "Page",
    "Pager",
    "Reload",
    "configure_logging",
    "find_config_file",
    "health_check",
    "load_db_configs",
    "new_pager",
    "open_connection",
    "parse_datetime_bytes",
    "parse_time_bytes",
    "prepare_reload",
    "settings",
    "setup_from_file",
]
