"""Integration tests: engine → session → a real PostgreSQL instance.

Uses RAWQL_PG_URL (e.g. ``postgresql+psycopg://user:pw@localhost/rawql``).
Skips all tests if the env var is unset or connection fails.
Mirrors the SQLite integration tests; placeholders use psycopg's ``%s``.
"""
from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from rawql.engine import Engine
from rawql.errors import ConnectError, ExecutionError
from rawql.log import LogLevel, LogSink

pytest.importorskip("psycopg", reason="psycopg required for Postgres integration tests")


@pytest.fixture(scope="module")
def pg_engine() -> Iterator[Engine]:
    url = os.environ.get("RAWQL_PG_URL")
    if not url:
        pytest.skip("RAWQL_PG_URL not set")
    try:
        engine = Engine(url, log=LogSink(level=LogLevel.DISABLED))
    except ConnectError as e:
        pytest.skip(f"Cannot connect to Postgres: {e}")
    with engine:
        yield engine


@pytest.fixture()
def pg_session(pg_engine: Engine):
    s = pg_engine.new_session()
    s.raw("DROP TABLE IF EXISTS rawql_user").exec()
    s.raw("CREATE TABLE rawql_user(name text, age integer)").exec()
    yield s
    s.clear()
    s.raw("DROP TABLE IF EXISTS rawql_user").exec()


@pytest.mark.integration
def test_pg_insert_two_rows(pg_session):
    result = pg_session.raw(
        "INSERT INTO rawql_user(name) VALUES (%s), (%s)", "Tom", "Sam"
    ).exec()
    assert result.rows_affected == 2


@pytest.mark.integration
def test_pg_duplicate_create_then_recover(pg_session):
    with pytest.raises(ExecutionError, match="already exists"):
        pg_session.raw("CREATE TABLE rawql_user(name text)").exec()
    assert pg_session.sql == ""
    result = pg_session.raw("INSERT INTO rawql_user(name) VALUES (%s)", "Tom").exec()
    assert result.rows_affected == 1


@pytest.mark.integration
def test_pg_query_rows_and_row(pg_session):
    pg_session.raw(
        "INSERT INTO rawql_user VALUES (%s, %s), (%s, %s)", "Tom", 20, "Ann", 41
    ).exec()
    rows = pg_session.raw("SELECT name, age FROM rawql_user ORDER BY age").query_rows()
    assert rows.columns == ("name", "age")
    assert rows.rows == [("Tom", 20), ("Ann", 41)]
    row = pg_session.raw("SELECT name FROM rawql_user WHERE age > %s", 100).query_row()
    assert row.values is None and row.err is None
