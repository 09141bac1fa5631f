"""Outcomes of the session's terminal operations.

``ExecResult``
    What a data-modifying statement reports back.

``Row``
    The single-row cursor returned by ``query_row``.  Neither "no rows" nor
    a driver failure is raised when the query runs; both are deferred until
    the caller calls :meth:`Row.scan` (or inspects :attr:`Row.err`).

``Rows``
    The buffered multi-row cursor returned by ``query_rows``.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from rawql.errors import NoRowsError, RawQLError


@dataclass(frozen=True)
class ExecResult:
    """Outcome of :meth:`~rawql.session.raw.Session.exec`.

    Attributes:
        rows_affected: Rows inserted, updated or deleted.  ``None`` when the
            driver cannot tell (DDL statements on most drivers).
        last_insert_id: Row id generated by the last insert, when the
            driver reports one.
    """

    rows_affected: int | None = None
    last_insert_id: int | None = None


@dataclass(frozen=True)
class Row:
    """Single-row cursor.

    Attributes:
        values: The first row of the result, or ``None`` when there was none.
        columns: Column names of the result.
        err: The deferred execution error, if the statement failed.
        sql: The statement that produced this row.
    """

    values: tuple[Any, ...] | None = None
    columns: tuple[str, ...] = ()
    err: RawQLError | None = None
    sql: str = ""

    def scan(self) -> tuple[Any, ...]:
        """Return the row's values.

        Raises:
            ExecutionError: The deferred error, if the statement failed.
            NoRowsError: If the statement succeeded but matched no row.
        """
        if self.err is not None:
            raise self.err
        if self.values is None:
            raise NoRowsError(self.sql)
        return self.values

    def as_dict(self) -> dict[str, Any]:
        """Return the row as a ``{column: value}`` mapping.

        Raises the same errors as :meth:`scan`.
        """
        return dict(zip(self.columns, self.scan()))


@dataclass
class Rows:
    """Buffered multi-row cursor.

    All rows are fetched before the connection goes back to the pool, so a
    ``Rows`` never holds a connection open.

    Attributes:
        columns: Column names of the result (empty for statements that
            return no rows).
        rows: Every row of the result, in driver order.
    """

    columns: tuple[str, ...] = ()
    rows: Sequence[tuple[Any, ...]] = field(default_factory=list)
    _position: int = field(default=0, init=False, repr=False)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        # Consumes like fetchone(): rows already read are not repeated.
        while (row := self.fetchone()) is not None:
            yield row

    def __len__(self) -> int:
        return len(self.rows)

    def fetchone(self) -> tuple[Any, ...] | None:
        """Return the next unread row, or ``None`` when exhausted."""
        if self._position >= len(self.rows):
            return None
        row = self.rows[self._position]
        self._position += 1
        return row

    def fetchall(self) -> list[tuple[Any, ...]]:
        """Return every unread row."""
        remaining = list(self.rows[self._position:])
        self._position = len(self.rows)
        return remaining
