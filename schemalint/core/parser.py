"""DDL parsing, delegated to sqlglot."""

from __future__ import annotations

from typing import List

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError as SqlglotParseError
from sqlglot.errors import SqlglotError

from schemalint.core.errors import ParseError

Statement = exp.Expression

# Statement kinds a schema file may contain. Anything else, including the
# exp.Command fallback sqlglot uses for syntax it cannot model, is rejected.
DDL_STATEMENTS = (exp.Create, exp.Drop, exp.Alter, exp.Set, exp.Use)


def _describe(e: SqlglotError) -> str:
    # sqlglot messages embed a highlighted excerpt; keep only the facts
    if isinstance(e, SqlglotParseError) and e.errors:
        err = e.errors[0]
        return f"{err.get('description')} at line {err.get('line')}, column {err.get('col')}"
    return str(e).splitlines()[0] if str(e) else type(e).__name__


def _check_ddl(stmts: List[Statement]) -> None:
    for position, stmt in enumerate(stmts, start=1):
        if not isinstance(stmt, DDL_STATEMENTS):
            head = stmt.sql()[:40]
            raise ParseError(f"unexpected {stmt.key} statement at statement {position}: {head}")


class SqlglotParser:
    def __init__(self, dialect: str = "mysql") -> None:
        self.dialect = dialect

    def parse(self, data: bytes) -> List[Statement]:
        """Parse raw schema text into DDL statements, in source order.

        Empty statements (stray semicolons, trailing whitespace) are dropped;
        any statement that is not DDL is a ParseError.
        """
        try:
            script = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"schema is not valid UTF-8: {e}") from e
        try:
            parsed = sqlglot.parse(script, read=self.dialect)
        except SqlglotError as e:
            raise ParseError(_describe(e)) from e
        stmts = [stmt for stmt in parsed if stmt is not None]
        _check_ddl(stmts)
        return stmts
