"""Error taxonomy for schemalint.

Every failure a run can hit is one of these. Third-party exceptions are
translated where they happen and chained via ``raise ... from``; only the CLI
turns an error into an exit status.
"""

from __future__ import annotations

from typing import Type, TypeVar


class SchemaLintError(Exception):
    """Base class for all schemalint errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ArgumentError(SchemaLintError):
    """Wrong number of positional arguments."""


class ConfigError(SchemaLintError):
    """Config file exists but cannot be loaded or validated."""


# Construction-time failures: raised by the resolver, never after I/O.
class SourceConstructionError(SchemaLintError):
    pass


class MalformedSource(SourceConstructionError):
    pass


class UnsupportedScheme(SourceConstructionError):
    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(f"unsupported source scheme '{scheme}'")


class MissingParameter(SourceConstructionError):
    def __init__(self, scheme: str, parameter: str) -> None:
        self.scheme = scheme
        self.parameter = parameter
        super().__init__(f"'{scheme}' source requires parameter '{parameter}'")


# Read-time failures: raised by adapters.
class SourceReadError(SchemaLintError):
    pass


class SourceNotFound(SourceReadError):
    pass


class ConnectionFailure(SourceReadError):
    pass


class IntrospectionFailure(SourceReadError):
    pass


class RefNotFound(SourceReadError):
    def __init__(self, commitish: str, reason: str = "") -> None:
        self.commitish = commitish
        msg = f"could not resolve commitish '{commitish}'"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class PathNotFound(SourceReadError):
    def __init__(self, path: str, commit: str) -> None:
        self.path = path
        self.commit = commit
        super().__init__(f"path '{path}' not found in commit {commit}")


class ParseError(SchemaLintError):
    pass


class FormatError(SchemaLintError):
    pass


class OutputError(SchemaLintError):
    pass


E = TypeVar("E", bound=SchemaLintError)


def wrap(err: E, context: str) -> E:
    """Return a copy of ``err`` with ``context`` prefixed to its message.

    The class is preserved so callers can still tell the failure kind apart;
    the original error becomes ``__cause__``.
    """
    cls: Type[E] = type(err)
    wrapped = cls.__new__(cls)
    wrapped.__dict__.update(err.__dict__)
    SchemaLintError.__init__(wrapped, f"{context}: {err.message}")
    wrapped.__cause__ = err
    return wrapped
