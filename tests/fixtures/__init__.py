"""Test fixtures: sample DDL and console helpers."""

from __future__ import annotations

import io

#: Table used throughout the session tests.
USER_DDL = "CREATE TABLE User(Name text, Age integer)"


def lines(console: io.StringIO) -> list[str]:
    """Return the non-empty lines written to ``console`` so far."""
    return [line for line in console.getvalue().splitlines() if line]


def reset(console: io.StringIO) -> None:
    """Forget everything written to ``console``."""
    console.seek(0)
    console.truncate(0)
