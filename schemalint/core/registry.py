from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple, Type

from schemalint.adapters.base import SchemaSource

# Adapters produce raw schema bytes for one kind of source descriptor
AdapterFactory = Type[SchemaSource]

# Parser and formatter are per-dialect factories
# parser: () -> obj with .parse(bytes) -> List[Statement]
# formatter: (pretty) -> obj with .render(Statement) -> str
ParserFactory = Callable[[], object]
FormatterFactory = Callable[[bool], object]


class AdapterRegistry:
    _registry: Dict[str, AdapterFactory] = {}

    @classmethod
    def register(cls, kind: str, factory: AdapterFactory) -> None:
        cls._registry[kind] = factory

    @classmethod
    def get(cls, kind: str) -> Optional[AdapterFactory]:
        return cls._registry.get(kind)


class DialectRegistry:
    _parsers: Dict[str, ParserFactory] = {}
    _formatters: Dict[str, FormatterFactory] = {}

    @classmethod
    def register_parser(cls, dialect: str, parser: ParserFactory) -> None:
        cls._parsers[dialect] = parser

    @classmethod
    def register_formatter(cls, dialect: str, formatter: FormatterFactory) -> None:
        cls._formatters[dialect] = formatter

    @classmethod
    def get_parser(cls, dialect: str) -> Optional[ParserFactory]:
        return cls._parsers.get(dialect)

    @classmethod
    def get_formatter(cls, dialect: str) -> Optional[FormatterFactory]:
        return cls._formatters.get(dialect)

    @classmethod
    def supported_dialects(cls) -> Tuple[str, ...]:
        return tuple(sorted(set(cls._parsers.keys()) & set(cls._formatters.keys())))


# Bootstrap built-ins. The adapter set is closed: the resolver only ever
# produces these four descriptor kinds.
def _bootstrap_defaults() -> None:
    from schemalint.adapters.file.adapter import LocalFileSource
    from schemalint.adapters.localgit.adapter import LocalGitSource
    from schemalint.adapters.mysql.adapter import MySQLSource
    from schemalint.adapters.stdin.adapter import StdinSource

    AdapterRegistry.register("file", LocalFileSource)
    AdapterRegistry.register("stdin", StdinSource)
    AdapterRegistry.register("mysql", MySQLSource)
    AdapterRegistry.register("local-git", LocalGitSource)

    from schemalint.core.formatter import SqlglotFormatter
    from schemalint.core.parser import SqlglotParser

    DialectRegistry.register_parser("mysql", lambda: SqlglotParser("mysql"))
    DialectRegistry.register_formatter("mysql", lambda pretty: SqlglotFormatter("mysql", pretty))


_bootstrap_defaults()
