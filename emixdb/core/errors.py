"""
Exception hierarchy.

``FatalConfigError`` subclasses describe a broken configuration and are meant
to halt application startup; everything else is an ordinary per-call error.
Driver and SQLAlchemy errors are never wrapped.
"""

from sqlalchemy.exc import NoResultFound


class EmixDbError(Exception):
    """Base class for all emixdb errors."""


class FatalConfigError(EmixDbError):
    """Unrecoverable configuration problem (startup must not continue)."""


class EmptyNameError(FatalConfigError):
    def __init__(self) -> None:
        super().__init__("connection name must not be empty")


class ConfigFileError(FatalConfigError):
    """Config file is missing, unreadable, or does not match the expected schema."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class EmptyConnectionStringError(EmixDbError, ValueError):
    def __init__(self) -> None:
        super().__init__("connection string must not be empty")


class NoRowsError(EmixDbError, NoResultFound):
    """The paged query matched zero rows."""

    def __init__(self, message: str = "no rows in result set") -> None:
        super().__init__(message)
