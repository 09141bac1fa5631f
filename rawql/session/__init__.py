"""rawQL session layer: raw SQL builder/executor and its result types."""
from rawql.session.raw import Session
from rawql.session.result import ExecResult, Row, Rows

__all__ = [
    "Session",
    "ExecResult",
    "Row",
    "Rows",
]
