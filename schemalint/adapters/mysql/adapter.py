from __future__ import annotations

import logging
from typing import BinaryIO, Dict, List, Optional

from sqlalchemy import MetaData, Table, create_engine, inspect, text
from sqlalchemy.dialects import mysql
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlalchemy.schema import CreateTable

from schemalint.adapters.base import SchemaSource
from schemalint.core.descriptor import MySQLSourceDescriptor
from schemalint.core.errors import ConnectionFailure, IntrospectionFailure

logger = logging.getLogger(__name__)

STATEMENT_SEPARATOR = b";\n\n"


def build_url(
    descriptor: MySQLSourceDescriptor,
    driver: str = "pymysql",
    connect_timeout: Optional[int] = None,
) -> URL:
    """Translate a descriptor into a SQLAlchemy URL.

    Options from the source identifier are passed to the driver untouched;
    settings from config only fill in what the identifier leaves out.
    """
    query: Dict[str, str] = dict(descriptor.options)
    if descriptor.unix_socket:
        query.setdefault("unix_socket", descriptor.unix_socket)
    if connect_timeout is not None:
        query.setdefault("connect_timeout", str(connect_timeout))
    return URL.create(
        f"mysql+{driver}",
        username=descriptor.user or None,
        password=descriptor.password,
        host=descriptor.host,
        port=descriptor.port if descriptor.host else None,
        database=descriptor.dbname,
        query=query,
    )


def _error_text(e: Exception) -> str:
    orig = getattr(e, "orig", None)
    return str(orig if orig is not None else e)


def _table_definition(conn: Connection, name: str) -> str:
    if conn.dialect.name == "mysql":
        quoted = conn.dialect.identifier_preparer.quote_identifier(name)
        row = conn.execute(text(f"SHOW CREATE TABLE {quoted}")).one()
        return row[1]
    # Other backends have no SHOW CREATE TABLE; render the reflected table
    # as MySQL DDL instead.
    table = Table(name, MetaData(), autoload_with=conn)
    return str(CreateTable(table).compile(dialect=mysql.dialect())).strip()


class MySQLSource(SchemaSource):
    descriptor: MySQLSourceDescriptor

    def _engine(self) -> Engine:
        settings = self.config.mysql
        url = build_url(self.descriptor, settings.driver, settings.connect_timeout)
        # NullPool: the connection is really closed when released
        return create_engine(url, poolclass=NullPool)

    def table_names(self, conn: Connection) -> List[str]:
        # ascending by name keeps the output reproducible across servers
        return sorted(inspect(conn).get_table_names())

    def write_schema(self, sink: BinaryIO) -> None:
        logger.debug("connecting to %s", self.descriptor.redacted())
        try:
            engine = self._engine()
        except (ImportError, SQLAlchemyError) as e:
            # unknown driver name, or the driver package is not installed
            raise ConnectionFailure(f"cannot load mysql driver '{self.config.mysql.driver}': {e}") from e
        try:
            try:
                conn = engine.connect()
            except (DBAPIError, TypeError) as e:
                # TypeError: the driver rejected one of the forwarded options
                raise ConnectionFailure(
                    f"failed to connect to {self.descriptor.redacted()}: {_error_text(e)}"
                ) from e
            with conn:
                try:
                    names = self.table_names(conn)
                    logger.debug("found %d tables in %s", len(names), self.descriptor.dbname)
                    for name in names:
                        sink.write(_table_definition(conn, name).encode("utf-8"))
                        sink.write(STATEMENT_SEPARATOR)
                except SQLAlchemyError as e:
                    raise IntrospectionFailure(
                        f"failed to introspect database '{self.descriptor.dbname}': {_error_text(e)}"
                    ) from e
        finally:
            engine.dispose()
