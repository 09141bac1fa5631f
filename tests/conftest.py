"""Shared pytest fixtures for rawQL unit and integration tests."""
from __future__ import annotations

import io
from collections.abc import Iterator
from pathlib import Path

import pytest

from rawql.engine import Engine
from rawql.log import LogSink
from rawql.session import Session
from tests.fixtures import USER_DDL, reset


@pytest.fixture()
def console() -> io.StringIO:
    """In-memory console that a test sink writes to."""
    return io.StringIO()


@pytest.fixture()
def sink(console: io.StringIO) -> LogSink:
    """Verbose sink writing to ``console``."""
    return LogSink(stream=console)


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    """URL of a fresh SQLite database file."""
    return f"sqlite:///{tmp_path / 'gee.db'}"


@pytest.fixture()
def engine(db_url: str, sink: LogSink) -> Iterator[Engine]:
    with Engine(db_url, log=sink) as e:
        yield e


@pytest.fixture()
def session(engine: Engine, console: io.StringIO) -> Session:
    """Session on a database that already holds an empty ``User`` table.

    The console is emptied afterwards so tests only see their own output.
    """
    s = engine.new_session()
    s.raw(USER_DDL).exec()
    reset(console)
    return s

