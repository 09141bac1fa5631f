"""Custom exception hierarchy for rawQL.

All public errors inherit from RawQLError so callers can catch the base
class for any rawQL-specific failure.  Driver exceptions are never raised
directly; they are chained as ``__cause__`` of the rawQL error.
"""
from __future__ import annotations

from typing import Any


class RawQLError(Exception):
    """Base exception for all rawQL errors."""


class ConnectError(RawQLError):
    """Raised when the database handle cannot be opened, reached or closed.

    Args:
        message: Human-readable description.
        url: The database URL involved, with any password masked.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ExecutionError(RawQLError):
    """Raised when the driver rejects a buffered statement.

    The session has already been cleared when this is raised, so the
    failed statement is kept on the error for inspection.

    Args:
        message: The driver's error message.
        sql: The statement text that failed.
        params: The positional parameters bound to it.
    """

    def __init__(
        self,
        message: str,
        sql: str = "",
        params: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.sql = sql
        self.params: list[Any] = params or []


class NoRowsError(RawQLError):
    """Raised by :meth:`rawql.session.result.Row.scan` when the query matched nothing.

    The session never raises this itself; an empty single-row query is a
    normal outcome left to the caller.
    """

    def __init__(self, sql: str = "") -> None:
        super().__init__("no rows in result set")
        self.sql = sql


class ConfigError(RawQLError):
    """Raised when an :class:`~rawql.config.EngineConfig` is misconfigured.

    Args:
        message: Human-readable description.
        field: The configuration field at fault.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
