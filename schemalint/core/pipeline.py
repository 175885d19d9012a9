from __future__ import annotations

import io
import logging
import os
from typing import List, TextIO

from schemalint.adapters.base import SchemaSource
from schemalint.core.errors import OutputError, SchemaLintError, wrap
from schemalint.core.parser import Statement

logger = logging.getLogger(__name__)

STATEMENT_TERMINATOR = ";\n\n"
OUTPUT_MODE = 0o664


def read_source(source: SchemaSource) -> bytes:
    buf = io.BytesIO()
    try:
        source.write_schema(buf)
    except SchemaLintError as e:
        raise wrap(e, "failed to read from source") from e
    logger.debug("read %d bytes from %s source", buf.tell(), source.descriptor.kind)
    return buf.getvalue()


def parse_schema(data: bytes, parser) -> List[Statement]:
    try:
        return parser.parse(data)
    except SchemaLintError as e:
        raise wrap(e, "failed to parse source") from e


def write_statements(stmts: List[Statement], formatter, dst: TextIO) -> int:
    """Render each statement in order and write it with its terminator."""
    for stmt in stmts:
        try:
            rendered = formatter.render(stmt)
        except SchemaLintError as e:
            raise wrap(e, "failed to format source") from e
        try:
            dst.write(rendered)
            dst.write(STATEMENT_TERMINATOR)
        except (OSError, UnicodeError) as e:
            raise OutputError(f"failed to write output: {e}") from e
    return len(stmts)


def lint_schema(source: SchemaSource, dst: TextIO, parser, formatter) -> int:
    """Read, parse and re-emit one schema source. Returns the statement count."""
    data = read_source(source)
    stmts = parse_schema(data, parser)
    logger.debug("parsed %d statements", len(stmts))
    return write_statements(stmts, formatter, dst)


def open_output(path: str) -> TextIO:
    """Truncate-create path for writing; the file is never world-writable."""
    try:
        fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, OUTPUT_MODE)
    except OSError as e:
        raise OutputError(f"failed to open file {path} for writing: {e.strerror or e}") from e
    return os.fdopen(fd, "w", encoding="utf-8")
