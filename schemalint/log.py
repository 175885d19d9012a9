from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# third-party loggers that write while a schema is being processed
QUIET_LOGGERS = ("sqlglot",)


def setup_logging(level: str = "WARNING") -> None:
    """Route schemalint's loggers to stderr through rich.

    The ``schemalint`` logger gets the requested level. sqlglot shares the
    handler but stays at ERROR unless debugging: its fallback warnings are
    reported again as a ParseError, and a failing run prints one line only.
    stdout stays reserved for rendered schema text.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    _install(logging.getLogger("schemalint"), handler, numeric)
    quiet_level = numeric if numeric <= logging.DEBUG else logging.ERROR
    for name in QUIET_LOGGERS:
        _install(logging.getLogger(name), handler, quiet_level)


def _install(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
