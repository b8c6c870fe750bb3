"""
YAML config loader for named database connections.

Expected layout::

    emix:
      db:
        - name: main
          dialect: mysql
          connect: user:pass@tcp(127.0.0.1:3306)/app
          maxIdleConns: 5
          maxOpenConns: 20
          connMaxLifetime: 3600
"""

import logging
from datetime import timedelta
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from emixdb.core.config import settings
from emixdb.core.errors import ConfigFileError
from emixdb.core.pool.connect import ConnectionOptions

_log = logging.getLogger(__name__)


class DbConfig(BaseModel):
    """One entry of ``emix.db``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    dialect: str = ""
    connect: str = ""
    max_idle_conns: int = Field(default=0, ge=0, alias="maxIdleConns")
    max_open_conns: int = Field(default=0, ge=0, alias="maxOpenConns")
    conn_max_lifetime: int = Field(default=0, ge=0, alias="connMaxLifetime")

    def to_options(self) -> ConnectionOptions:
        return ConnectionOptions(
            dialect=self.dialect,
            connect=self.connect,
            max_idle_conns=self.max_idle_conns,
            max_open_conns=self.max_open_conns,
            conn_max_lifetime=timedelta(seconds=self.conn_max_lifetime),
        )


class _EmixSection(BaseModel):
    db: list[DbConfig] | None = None


class _RootConfig(BaseModel):
    emix: _EmixSection | None = None


def find_config_file(
    candidates: list[str] | None = None, base_dir: str | Path | None = None
) -> Path | None:
    """Return the first existing file among *candidates* (default: settings.CONFIG_FILES)."""
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    names = candidates if candidates is not None else settings.CONFIG_FILES
    for name in names:
        p = base / name
        if p.is_file():
            return p
    return None


def load_db_configs(path: str | Path) -> list[DbConfig]:
    """
    Parse *path* and return its ``emix.db`` entries in file order.

    Raises ConfigFileError if the file is missing, is not valid YAML, or
    does not match the layout above. A document without ``emix.db`` yields [].
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(p, f"cannot read file ({e.strerror or e})") from e

    try:
        doc = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigFileError(p, f"invalid YAML: {e}") from e

    if doc is None:
        return []
    if not isinstance(doc, dict):
        raise ConfigFileError(p, "top level must be a mapping")

    try:
        root = _RootConfig.model_validate(doc)
    except ValidationError as e:
        raise ConfigFileError(p, f"invalid db config: {e}") from e

    configs = (root.emix.db if root.emix is not None else None) or []
    _log.debug("Loaded %d db config(s) from %s", len(configs), p)
    return configs
