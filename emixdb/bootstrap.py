"""
Startup wiring: build a ConnectionRegistry from the conventional config file,
and prepare registry reloads after startup.

Errors raised here are configuration errors; let them stop the application.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from emixdb.core.db_config import DbConfig, find_config_file, load_db_configs
from emixdb.core.pool import ConnectionRegistry

logger = logging.getLogger(__name__)


def setup_from_file(
    registry: ConnectionRegistry | None = None,
    path: str | Path | None = None,
) -> ConnectionRegistry:
    """
    Register every database from *path*, or from the first of
    ``config.yml`` / ``config.yaml`` found in the working directory.

    No file found -> registry returned unchanged (an explicit *path* that does
    not exist raises ConfigFileError).
    """
    registry = registry if registry is not None else ConnectionRegistry()
    config_path = Path(path) if path is not None else find_config_file()
    if config_path is None:
        logger.info("No database config file found; registry left empty")
        return registry

    configs = load_db_configs(config_path)
    for cfg in configs:
        registry.register_options(cfg.name, cfg.to_options())
    logger.info("Loaded %d database(s) from %s", len(configs), config_path)
    return registry


@dataclass
class Reload:
    """Configs gathered for a later ``replace_all``."""

    configs: list[DbConfig] = field(default_factory=list)

    def apply(self, registry: ConnectionRegistry) -> bool:
        """Replace the registry contents. Returns False (no-op) when nothing was gathered."""
        if not self.configs:
            logger.debug("Reload skipped: no configs")
            return False
        registry.replace_all(self.configs)
        return True


def prepare_reload(
    path: str | Path | None = None, configs: Iterable[DbConfig] = ()
) -> Reload:
    """Explicit *configs* win; otherwise read *path* if it exists."""
    given = list(configs)
    if given:
        return Reload(configs=given)
    if path is not None and Path(path).is_file():
        return Reload(configs=load_db_configs(path))
    return Reload()
