"""Engine: owns the database handle and hands out sessions.

The engine opens a SQLAlchemy engine (a thread-safe connection pool), checks
that the database is actually reachable, and creates :class:`Session`
instances that share the pool but keep their own statement buffer::

    from rawql import Engine

    with Engine("sqlite:///gee.db") as engine:
        session = engine.new_session()
        session.raw("CREATE TABLE User(Name text)").exec()

Connection failures are logged and raised as
:class:`~rawql.errors.ConnectError`; no engine is returned.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import Engine as Database
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from rawql.config import EngineConfig
from rawql.errors import ConnectError
from rawql.log import LogSink, default_sink
from rawql.session.raw import Session, driver_message


class Engine:
    """Entry point: database handle lifecycle plus session factory.

    Args:
        url: SQLAlchemy database URL.
        log: Log sink shared with every session; defaults to the
            process-wide sink.
        **engine_kwargs: Forwarded to :func:`sqlalchemy.create_engine`.

    Raises:
        ConnectError: If the driver cannot be loaded, the URL is invalid, or
            the database cannot be reached.
    """

    def __init__(self, url: str, *, log: LogSink | None = None, **engine_kwargs: Any) -> None:
        self._log = log if log is not None else default_sink()
        self._url = _masked(url)
        self._closed = False
        self._db = self._open(url, engine_kwargs)
        self._log.info("Connect database success")

    @classmethod
    def from_config(cls, config: EngineConfig, log: LogSink | None = None) -> Engine:
        """Open an engine from an :class:`EngineConfig`.

        The config's log level is applied to ``log`` (or the process-wide
        sink) before connecting.
        """
        sink = log if log is not None else default_sink()
        sink.set_level(config.log_level)
        return cls(config.url, log=sink, echo=config.echo)

    def _open(self, url: str, engine_kwargs: dict[str, Any]) -> Database:
        db: Database | None = None
        try:
            db = create_engine(url, **engine_kwargs)
            # Reachability check: the pool connects lazily, so force one
            # round trip now.
            with db.connect():
                pass
        except (SQLAlchemyError, ImportError) as exc:
            if db is not None:
                db.dispose()
            message = driver_message(exc)
            self._log.error(message)
            raise ConnectError(message, url=self._url) from exc
        return db

    @property
    def db(self) -> Database:
        """The underlying SQLAlchemy engine."""
        return self._db

    @property
    def url(self) -> str:
        """The database URL with any password masked."""
        return self._url

    @property
    def closed(self) -> bool:
        return self._closed

    def new_session(self) -> Session:
        """Return a fresh :class:`Session` on this engine's handle.

        Raises:
            ConnectError: If the engine has been closed.
        """
        if self._closed:
            raise ConnectError("Engine is closed", url=self._url)
        return Session(self._db, log=self._log)

    def close(self) -> None:
        """Dispose of the connection pool.  Calling it twice is a no-op.

        Raises:
            ConnectError: If the pool could not be disposed.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._db.dispose()
        except SQLAlchemyError as exc:
            self._log.error("Failed to close database")
            raise ConnectError(f"Failed to close database: {exc}", url=self._url) from exc
        self._log.info("Close database success")

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Engine(url={self._url!r}, closed={self._closed})"


def _masked(url: str) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return url
