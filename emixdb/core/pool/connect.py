"""
Open SQLAlchemy engines from ConnectionOptions.

Dialect names map onto installed drivers: pymysql (MySQL, the default),
psycopg (PostgreSQL) or the stdlib sqlite3. Pooling itself is SQLAlchemy's;
this module only translates the idle/open/lifetime knobs onto it.
"""

import logging
import re
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, Field
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from emixdb.core.config import settings
from emixdb.core.errors import EmptyConnectionStringError

_log = logging.getLogger(__name__)

_DRIVERS = {
    "mysql": "mysql+pymysql",
    "postgres": "postgresql+psycopg",
    "postgresql": "postgresql+psycopg",
    "sqlite": "sqlite",
}

_GO_TCP_ADDR = re.compile(r"@tcp\(([^)]*)\)")


class ConnectionOptions(BaseModel):
    """How to open one connection handle."""

    dialect: str = ""
    connect: str = ""
    max_idle_conns: int = Field(default=0, ge=0)
    max_open_conns: int = Field(default=0, ge=0)
    conn_max_lifetime: timedelta = timedelta(0)


def _resolve_driver(dialect: str) -> str:
    d = (dialect or settings.DEFAULT_DIALECT).strip().lower()
    if "+" in d:
        return d
    return _DRIVERS.get(d, d)


def build_url(dialect: str, connect: str) -> str:
    """
    Turn a dialect plus connection string into a SQLAlchemy URL.

    ``connect`` may already be a URL (``scheme://...``); otherwise it is a DSN
    such as ``user:pass@host:3306/db`` (``@tcp(host:port)`` is accepted too)
    or, for sqlite, a file path / ``:memory:``.
    """
    if "://" in connect:
        return connect
    driver = _resolve_driver(dialect)
    if driver.startswith("sqlite"):
        return f"{driver}:///{connect}"
    dsn = _GO_TCP_ADDR.sub(r"@\1", connect)
    return f"{driver}://{dsn}"


def _pool_kwargs(driver: str, op: ConnectionOptions) -> dict[str, Any]:
    """Translate pool knobs; anything that cannot be applied is logged and skipped."""
    wanted = op.max_idle_conns > 0 or op.max_open_conns > 0
    lifetime = op.conn_max_lifetime.total_seconds()
    kwargs: dict[str, Any] = {}

    if lifetime > 0:
        kwargs["pool_recycle"] = int(lifetime)

    if not wanted:
        return kwargs
    if driver.startswith("sqlite"):
        _log.warning(
            "Pool sizing (idle=%s, open=%s) ignored for dialect %s",
            op.max_idle_conns,
            op.max_open_conns,
            driver,
        )
        return kwargs

    pool_size = op.max_idle_conns if op.max_idle_conns > 0 else None
    if pool_size is not None:
        kwargs["pool_size"] = pool_size
    if op.max_open_conns > 0:
        base = pool_size if pool_size is not None else 5  # SQLAlchemy QueuePool default
        if op.max_open_conns < base:
            _log.warning(
                "max_open_conns=%s is below pool size %s; overflow disabled",
                op.max_open_conns,
                base,
            )
            kwargs["max_overflow"] = 0
        else:
            kwargs["max_overflow"] = op.max_open_conns - base
    return kwargs


def _connect_args(driver: str) -> dict[str, Any]:
    timeout = settings.CONNECT_TIMEOUT
    if timeout and timeout > 0 and driver.split("+")[0] in ("mysql", "postgresql"):
        return {"connect_timeout": timeout}
    return {}


def open_connection(op: ConnectionOptions) -> Engine:
    """
    Open an engine for *op*.

    Raises EmptyConnectionStringError when ``op.connect`` is empty. The engine
    connects lazily, so driver errors surface on first use.
    """
    if not op.connect:
        raise EmptyConnectionStringError()
    url = build_url(op.dialect, op.connect)
    driver = url.split("://", 1)[0]
    kwargs = _pool_kwargs(driver, op)
    connect_args = _connect_args(driver)
    if connect_args:
        kwargs["connect_args"] = connect_args
    engine = create_engine(url, **kwargs)
    _log.debug("Opened engine %s with %s", engine.url.render_as_string(), kwargs)
    return engine


def health_check(handle: Engine) -> bool:
    """Run SELECT 1 and return True if no exception."""
    try:
        with handle.connect() as conn:
            conn.execute(text("SELECT 1")).scalar()
        return True
    except Exception:
        _log.debug("Health check failed for %s", handle.url, exc_info=True)
        return False
