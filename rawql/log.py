"""Leveled, color-tagged console logging.

Two channels are kept apart so a human scanning the console can tell them
apart at a glance:

* ``info``  – tagged ``[info ]`` in blue.
* ``error`` – tagged ``[error]`` in red.

Each channel is a standard :class:`logging.Logger` with a single
:class:`logging.StreamHandler`.  :meth:`LogSink.set_level` rewires each
handler's stream to either the console or a discard target; nothing is
buffered or filtered on the way.

A :class:`LogSink` is passed by reference to the components that log.  A
process-wide default sink backs the module-level helpers::

    from rawql import log

    log.set_level(log.LogLevel.ERROR)
    log.info("not shown")
    log.errorf("table %s already exists", "User")
"""
from __future__ import annotations

import io
import logging
import sys
import threading
from enum import IntEnum
from typing import Any

# ---------------------------------------------------------------------------
# ANSI colours
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_RED = "\033[31m"
_BLUE = "\033[34m"

ERROR_TAG = f"{_RED}[error]{_RESET}"
INFO_TAG = f"{_BLUE}[info ]{_RESET}"

_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class LogLevel(IntEnum):
    """Ordered output thresholds.

    Attributes:
        INFO: Show informational and error messages.
        ERROR: Show error messages only.
        DISABLED: Show nothing.
    """

    INFO = 0
    ERROR = 1
    DISABLED = 2

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        """Return the level for a case-insensitive name (``"info"``, ...).

        Raises:
            ValueError: If ``name`` is not a level name.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            allowed = [level.name.lower() for level in cls]
            raise ValueError(
                f"Unknown log level: '{name}'. Expected one of {allowed}."
            ) from None


class _Console(io.TextIOBase):
    """Writes to whatever ``sys.stdout`` is at emission time."""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        return sys.stdout.write(s)

    def flush(self) -> None:
        sys.stdout.flush()


class _Discard(io.TextIOBase):
    """Accepts and drops everything written to it."""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        return len(s)


def _make_channel(
    name: str, tag: str, stream: io.TextIOBase
) -> tuple[logging.Logger, logging.StreamHandler]:
    # Standalone loggers: never registered with logging.getLogger, so each
    # sink owns its handlers and nothing reaches the root logger.
    logger = logging.Logger(name, level=logging.DEBUG)
    logger.propagate = False
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        logging.Formatter(
            f"{tag} %(asctime)s %(filename)s:%(lineno)d: %(message)s",
            datefmt=_DATE_FORMAT,
        )
    )
    logger.addHandler(handler)
    return logger, handler


class LogSink:
    """Two-channel console logger with a lock-guarded output level.

    Args:
        level: Initial output level.
        stream: Console target.  ``None`` writes to the current
            ``sys.stdout``.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        stream: io.TextIOBase | None = None,
    ) -> None:
        self._console = stream if stream is not None else _Console()
        self._discard = _Discard()
        self._mu = threading.Lock()
        self._error_logger, self._error_handler = _make_channel(
            "rawql.error", ERROR_TAG, self._console
        )
        self._info_logger, self._info_handler = _make_channel(
            "rawql.info", INFO_TAG, self._console
        )
        self._level = LogLevel.INFO
        self.set_level(level)

    @property
    def level(self) -> LogLevel:
        """The current output level."""
        return self._level

    def set_level(self, level: LogLevel | int) -> None:
        """Rewire both channels for ``level``.

        The error channel is discarded above ``ERROR`` and the info channel
        above ``INFO``; otherwise each writes to the console.  Each handler
        is switched once, straight to its final stream.
        """
        level = LogLevel(level)
        error_stream = self._discard if LogLevel.ERROR < level else self._console
        info_stream = self._discard if LogLevel.INFO < level else self._console
        with self._mu:
            self._error_handler.setStream(error_stream)
            self._info_handler.setStream(info_stream)
            self._level = level

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def info(self, *args: Any) -> None:
        """Log ``args`` joined by spaces on the info channel."""
        self._write(self._info_logger, _join(args))

    def infof(self, fmt: str, *args: Any) -> None:
        """Log ``fmt % args`` on the info channel."""
        self._write(self._info_logger, _format(fmt, args))

    def error(self, *args: Any) -> None:
        """Log ``args`` joined by spaces on the error channel."""
        self._write(self._error_logger, _join(args))

    def errorf(self, fmt: str, *args: Any) -> None:
        """Log ``fmt % args`` on the error channel."""
        self._write(self._error_logger, _format(fmt, args))

    def _write(self, logger: logging.Logger, message: str) -> None:
        # Always reached through exactly one public helper, so stacklevel=3
        # points %(filename)s:%(lineno)d at the code that logged.
        logger.info("%s", message, stacklevel=3)


def _join(args: tuple[Any, ...]) -> str:
    return " ".join(str(arg) for arg in args)


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args


# ---------------------------------------------------------------------------
# Process-wide default sink
# ---------------------------------------------------------------------------

_default = LogSink()


def default_sink() -> LogSink:
    """Return the process-wide sink used when no sink is passed explicitly."""
    return _default


def set_level(level: LogLevel | int) -> None:
    """Set the output level of the process-wide sink."""
    _default.set_level(level)


def info(*args: Any) -> None:
    _default._write(_default._info_logger, _join(args))


def infof(fmt: str, *args: Any) -> None:
    _default._write(_default._info_logger, _format(fmt, args))


def error(*args: Any) -> None:
    _default._write(_default._error_logger, _join(args))


def errorf(fmt: str, *args: Any) -> None:
    _default._write(_default._error_logger, _format(fmt, args))
