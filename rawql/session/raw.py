"""Raw SQL session: accumulate a statement, execute it, reset.

A :class:`Session` keeps SQL text and parameter values apart all the way to
the driver.  Fragments are appended with :meth:`Session.raw`; values are
always handed to the driver's parameter-binding path and never spliced into
the text::

    session = engine.new_session()
    result = (
        session.raw("INSERT INTO User(Name) VALUES (?), (?)", "Tom", "Sam")
        .exec()
    )
    assert result.rows_affected == 2

Every terminal operation (:meth:`~Session.exec`, :meth:`~Session.query_row`,
:meth:`~Session.query_rows`) logs the statement, runs it, and clears the
buffer on the way out whether it succeeded or not.  A session can therefore
be reused for any number of sequential statements, but it is not safe to
share between concurrent callers.

Statements are sent verbatim through
:meth:`sqlalchemy.engine.Connection.exec_driver_sql`, so placeholders use the
driver's own positional style (``?`` for ``sqlite3``).
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from rawql.errors import ExecutionError
from rawql.log import LogSink, default_sink
from rawql.session.result import ExecResult, Row, Rows

if TYPE_CHECKING:
    from sqlalchemy import CursorResult, Engine

#: Errors a terminal call turns into ExecutionError.  SQLAlchemy wraps DB-API
#: errors, but lets the driver's own binding errors (e.g. sqlite3's
#: OverflowError for out-of-range integers) through unwrapped.
DRIVER_ERRORS: tuple[type[Exception], ...] = (
    SQLAlchemyError,
    OverflowError,
    ValueError,
    TypeError,
)


class Session:
    """Reusable builder and executor for raw SQL statements.

    Args:
        db: Shared database handle.  Borrowed, never disposed here.
        log: Sink for statement and error logging; defaults to the
            process-wide sink.
    """

    def __init__(self, db: Engine, log: LogSink | None = None) -> None:
        self._db = db
        self._log = log if log is not None else default_sink()
        self._sql: list[str] = []
        self._sql_vars: list[Any] = []

    @property
    def db(self) -> Engine:
        """The borrowed database handle."""
        return self._db

    @property
    def sql(self) -> str:
        """The pending statement text."""
        return "".join(self._sql)

    @property
    def sql_vars(self) -> list[Any]:
        """A copy of the pending parameter values."""
        return list(self._sql_vars)

    def raw(self, sql: str, *values: Any) -> Session:
        """Append a fragment and its parameters; return ``self`` for chaining.

        Nothing is validated here.  A placeholder/parameter mismatch or a
        syntax error only shows up as an :class:`~rawql.errors.ExecutionError`
        from the terminal call.
        """
        self._sql.append(sql)
        self._sql.append(" ")
        self._sql_vars.extend(values)
        return self

    def clear(self) -> None:
        """Drop the pending statement and parameters."""
        self._sql = []
        self._sql_vars = []

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def exec(self) -> ExecResult:
        """Run the pending statement as INSERT/UPDATE/DELETE/DDL.

        The statement is committed on success.

        Returns:
            :class:`ExecResult` with the affected-row count and last insert id.

        Raises:
            ExecutionError: If the driver rejects the statement.
        """
        sql, params = self.sql, self.sql_vars
        try:
            self._log.info(sql, params)
            with self._db.begin() as conn:
                cursor = conn.exec_driver_sql(sql, tuple(params))
                return _exec_result(cursor)
        except DRIVER_ERRORS as exc:
            raise self._failed(exc, sql, params) from exc
        finally:
            self.clear()

    def query_row(self) -> Row:
        """Run the pending statement and keep at most its first row.

        Never raises for a failed statement or an empty result; both are
        reported through the returned :class:`Row`.
        """
        sql, params = self.sql, self.sql_vars
        try:
            self._log.info(sql, params)
            with self._db.begin() as conn:
                cursor = conn.exec_driver_sql(sql, tuple(params))
                if not cursor.returns_rows:
                    return Row(sql=sql)
                columns = tuple(cursor.keys())
                first = cursor.fetchone()
                cursor.close()
        except DRIVER_ERRORS as exc:
            err = self._failed(exc, sql, params)
            err.__cause__ = exc
            return Row(err=err, sql=sql)
        finally:
            self.clear()
        values = tuple(first) if first is not None else None
        return Row(values=values, columns=columns, sql=sql)

    def query_rows(self) -> Rows:
        """Run the pending statement and buffer every row it returns.

        Raises:
            ExecutionError: If the driver rejects the statement.
        """
        sql, params = self.sql, self.sql_vars
        try:
            self._log.info(sql, params)
            with self._db.begin() as conn:
                cursor = conn.exec_driver_sql(sql, tuple(params))
                if not cursor.returns_rows:
                    return Rows()
                return Rows(
                    columns=tuple(cursor.keys()),
                    rows=[tuple(row) for row in cursor],
                )
        except DRIVER_ERRORS as exc:
            raise self._failed(exc, sql, params) from exc
        finally:
            self.clear()

    def _failed(self, exc: Exception, sql: str, params: list[Any]) -> ExecutionError:
        message = driver_message(exc)
        self._log.error(message)
        return ExecutionError(message, sql=sql, params=params)


def driver_message(exc: BaseException) -> str:
    """Return the driver's own message, without SQLAlchemy's decorations."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def _exec_result(cursor: CursorResult[Any]) -> ExecResult:
    rowcount = cursor.rowcount
    return ExecResult(
        rows_affected=rowcount if rowcount >= 0 else None,
        last_insert_id=cursor.lastrowid or None,
    )
