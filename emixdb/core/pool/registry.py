"""
Name -> Engine registry.

One instance is shared by the whole application (hold it on your app context
rather than in a module global). Reads and writes are serialised with a lock;
``replace_all`` opens the new set first and then swaps the mapping in one step.
"""

import logging
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy.engine import Engine

from emixdb.core.errors import EmptyNameError

from .connect import ConnectionOptions, open_connection

if TYPE_CHECKING:
    from emixdb.core.db_config import DbConfig

_log = logging.getLogger(__name__)


def _require_name(name: str) -> None:
    if not name:
        raise EmptyNameError()


class ConnectionRegistry:
    """Thread-safe mapping of logical database name to an opened engine."""

    def __init__(self) -> None:
        self._dbs: dict[str, Engine] = {}
        self._lock = threading.Lock()

    def register(self, name: str, handle: Engine) -> None:
        """Register *handle* under *name*, replacing any previous entry."""
        _require_name(name)
        with self._lock:
            self._dbs[name] = handle
        _log.info("Registered database %r", name)

    def register_options(self, name: str, op: ConnectionOptions) -> Engine:
        """Open a handle from *op* and register it. Open errors propagate."""
        _require_name(name)
        handle = open_connection(op)
        self.register(name, handle)
        return handle

    def lookup(self, name: str) -> Engine | None:
        with self._lock:
            return self._dbs.get(name)

    def replace_all(self, configs: "Iterable[DbConfig]") -> None:
        """
        Discard the current set and install one handle per config.

        Nothing is swapped if any config fails to open; handles opened during
        the failed attempt are disposed. Handles already given out by
        ``lookup`` stay usable.
        """
        fresh: dict[str, Engine] = {}
        try:
            for cfg in configs:
                _require_name(cfg.name)
                handle = open_connection(cfg.to_options())
                # later entries win, as with register()
                replaced = fresh.pop(cfg.name, None)
                if replaced is not None:
                    replaced.dispose()
                fresh[cfg.name] = handle
        except Exception:
            for handle in fresh.values():
                handle.dispose()
            raise

        with self._lock:
            self._dbs = fresh
        _log.info("Replaced database registry: %s", sorted(fresh) or "(empty)")

    def dispose(self, name: str | None = None) -> None:
        """Remove and dispose one handle, or all of them when *name* is None."""
        with self._lock:
            if name is not None:
                handle = self._dbs.pop(name, None)
                handles = [handle] if handle is not None else []
            else:
                handles = list(self._dbs.values())
                self._dbs = {}
        for h in handles:
            h.dispose()

    def names(self) -> list[str]:
        with self._lock:
            return list(self._dbs)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._dbs

    def __len__(self) -> int:
        with self._lock:
            return len(self._dbs)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._dbs
