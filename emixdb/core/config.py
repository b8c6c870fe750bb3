"""
Process-wide settings, read from the environment (``EMIX_`` prefix) or ``.env``.
"""

import logging
from typing import Annotated, Any

from pydantic import BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_file_list(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EMIX_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        validate_assignment=True,
    )

    # Pager
    DEFAULT_PAGE_SIZE: int = Field(default=10, gt=0)

    # Connections
    DEFAULT_DIALECT: str = "mysql"
    CONNECT_TIMEOUT: int = 10  # seconds; 0 = driver default

    # Conventional config file names, searched in order
    CONFIG_FILES: Annotated[list[str] | str, BeforeValidator(parse_file_list)] = [
        "config.yml",
        "config.yaml",
    ]

    LOG_LEVEL: str = "INFO"


settings = Settings()  # type: ignore


def configure_logging(level: str | None = None) -> None:
    """Basic logging setup for embedding applications that have none of their own."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
