"""Canonical rendering of parsed statements, delegated to sqlglot."""

from __future__ import annotations

from sqlglot.errors import ErrorLevel, SqlglotError

from schemalint.core.errors import FormatError
from schemalint.core.parser import Statement


class SqlglotFormatter:
    def __init__(self, dialect: str = "mysql", pretty: bool = True) -> None:
        self.dialect = dialect
        self.pretty = pretty

    def render(self, stmt: Statement) -> str:
        try:
            return stmt.sql(
                dialect=self.dialect,
                pretty=self.pretty,
                unsupported_level=ErrorLevel.RAISE,
            )
        except SqlglotError as e:
            raise FormatError(f"cannot render {stmt.key} statement: {e}") from e
