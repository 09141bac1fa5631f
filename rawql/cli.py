"""rawQL demo.

Opens an engine, rebuilds a one-column ``User`` table, tries to create it a
second time (the error is logged and the run carries on), then inserts two
rows with placeholder binding.

Usage
-----
Against ``./gee.db``::

    python -m rawql

Against another database, errors only::

    python -m rawql --url sqlite:////tmp/demo.db --log-level error
"""
from __future__ import annotations

import argparse

from rawql import log
from rawql.config import EngineConfig
from rawql.engine import Engine
from rawql.errors import ConfigError, ConnectError, ExecutionError
from rawql.log import LogLevel

DEFAULT_URL = "sqlite:///gee.db"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rawql-demo", description=__doc__.splitlines()[0])
    parser.add_argument("--url", default=DEFAULT_URL, help=f"SQLAlchemy database URL (default: {DEFAULT_URL})")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=[level.name.lower() for level in LogLevel],
        help="console log level (default: info)",
    )
    return parser


def run(engine: Engine) -> int:
    """Run the demo statements on ``engine``; return the inserted row count."""
    s = engine.new_session()
    s.raw("DROP TABLE IF EXISTS User;").exec()
    s.raw("CREATE TABLE User(Name text);").exec()
    try:
        s.raw("CREATE TABLE User(Name text);").exec()
    except ExecutionError:
        pass  # already logged by the session
    result = s.raw("INSERT INTO User(`Name`) values (?), (?)", "Tom", "Sam").exec()
    return result.rows_affected or 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = (
            EngineConfig.builder(args.url)
            .log_level(LogLevel.parse(args.log_level))
            .build()
        )
    except ConfigError as exc:
        log.error(exc)
        return 1

    try:
        engine = Engine.from_config(config)
    except ConnectError:
        return 1

    with engine:
        try:
            count = run(engine)
        except ExecutionError:
            return 1  # already logged by the session
    print(f"Exec success, {count} affected")
    return 0
