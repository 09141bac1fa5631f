"""rawQL – raw SQL sessions over a pooled database handle.

Write the SQL yourself; keep the values out of it.

Public API
----------
``Engine``
    Opens and checks the database handle, hands out sessions, closes it.

``Session``
    Accumulates SQL fragments and positional parameters, executes them with
    ``exec`` / ``query_row`` / ``query_rows``, and resets after every call.

``LogSink`` / ``LogLevel``
    Two-channel, color-tagged console logging with a lock-guarded level.

Example::

    import rawql

    with rawql.Engine("sqlite:///gee.db") as engine:
        s = engine.new_session()
        s.raw("DROP TABLE IF EXISTS User").exec()
        s.raw("CREATE TABLE User(Name text)").exec()
        result = s.raw("INSERT INTO User(Name) VALUES (?), (?)", "Tom", "Sam").exec()
        print(result.rows_affected)  # 2
"""

from __future__ import annotations

from rawql.config import EngineConfig, EngineConfigBuilder
from rawql.engine import Engine
from rawql.errors import (
    ConfigError,
    ConnectError,
    ExecutionError,
    NoRowsError,
    RawQLError,
)
from rawql.log import LogLevel, LogSink, default_sink, set_level
from rawql.session import ExecResult, Row, Rows, Session

__all__ = [
    # Engine and sessions
    "Engine",
    "Session",
    # Results
    "ExecResult",
    "Row",
    "Rows",
    # Configuration
    "EngineConfig",
    "EngineConfigBuilder",
    # Logging
    "LogLevel",
    "LogSink",
    "default_sink",
    "set_level",
    # Errors
    "RawQLError",
    "ConnectError",
    "ExecutionError",
    "NoRowsError",
    "ConfigError",
]
