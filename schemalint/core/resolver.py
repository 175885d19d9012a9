from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import SplitResult, parse_qsl, unquote, urlsplit

from pydantic import ValidationError

from schemalint.adapters.base import SchemaSource
from schemalint.core.descriptor import (
    FileSourceDescriptor,
    LocalGitSourceDescriptor,
    MySQLSourceDescriptor,
    SourceDescriptor,
    StdinSourceDescriptor,
)
from schemalint.core.errors import MalformedSource, MissingParameter, UnsupportedScheme
from schemalint.core.registry import AdapterRegistry
from schemalint.policy.config_schema import CLIConfig

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"
MYSQL_PREFIX = "mysql://"
DEFAULT_MYSQL_PORT = 3306

# proto(address): tcp(host:port) or unix(/path/to.sock)
_ADDRESS_RE = re.compile(r"^(?P<proto>[a-z]+)\((?P<address>[^)]*)\)$")


def _query(parts: SplitResult) -> Dict[str, str]:
    # last value wins on repeated keys
    return dict(parse_qsl(parts.query, keep_blank_values=True))


def _location(parts: SplitResult) -> str:
    # file:///abs and file://rel/path both name a path
    return unquote(parts.netloc + parts.path)


def _parse_file(source: str, parts: SplitResult) -> SourceDescriptor:
    path = _location(parts)
    if not path:
        raise MissingParameter("file", "path")
    return FileSourceDescriptor(path=path)


def _split_host_port(address: str) -> Tuple[str, int]:
    host, _, port = address.partition(":")
    if not port:
        return host, DEFAULT_MYSQL_PORT
    if not port.isdigit():
        raise MalformedSource(f"invalid port '{port}' in mysql source")
    return host, int(port)


def _parse_mysql(source: str, parts: Optional[SplitResult]) -> SourceDescriptor:
    # urlsplit does not understand proto(address) authorities, so the DSN is
    # cut up by hand: the last '/' starts the database name and the last '@'
    # before it ends the userinfo.
    if source[:len(MYSQL_PREFIX)].lower() != MYSQL_PREFIX:
        raise MalformedSource("mysql source must start with mysql://")
    dsn, _, query = source[len(MYSQL_PREFIX):].partition("?")
    slash = dsn.rfind("/")
    if slash < 0:
        raise MissingParameter("mysql", "dbname")
    head, dbname = dsn[:slash], unquote(dsn[slash + 1:])
    userinfo, at, authority = head.rpartition("@")
    if not at:
        userinfo, authority = "", head

    user, has_password, password = userinfo.partition(":")
    host: Optional[str] = None
    port = DEFAULT_MYSQL_PORT
    unix_socket: Optional[str] = None

    m = _ADDRESS_RE.match(authority)
    if m:
        proto, address = m.group("proto"), m.group("address")
        if proto == "tcp":
            host, port = _split_host_port(address)
        elif proto == "unix":
            unix_socket = address
        else:
            raise MalformedSource(f"unsupported mysql network protocol '{proto}'")
    elif "(" in authority or ")" in authority:
        raise MalformedSource(f"malformed mysql address '{authority}'")
    elif authority:
        host, port = _split_host_port(authority)

    if not (host or unix_socket):
        raise MissingParameter("mysql", "host")
    if not dbname:
        raise MissingParameter("mysql", "dbname")

    return MySQLSourceDescriptor(
        user=unquote(user),
        password=unquote(password) if has_password else None,
        host=host,
        port=port,
        unix_socket=unix_socket,
        dbname=dbname,
        options=dict(parse_qsl(query, keep_blank_values=True)),
    )


def _parse_local_git(source: str, parts: SplitResult) -> SourceDescriptor:
    repo_path = _location(parts)
    if not repo_path:
        raise MissingParameter("local-git", "repository path")
    params = _query(parts)
    file = params.get("file")
    if not file:
        raise MissingParameter("local-git", "file")
    return LocalGitSourceDescriptor(
        repo_path=repo_path,
        file=file,
        commitish=params.get("commitish") or None,
    )


SchemeParser = Callable[[str, Optional[SplitResult]], SourceDescriptor]

_SCHEME_PARSERS: Dict[str, SchemeParser] = {
    "file": _parse_file,
    "mysql": _parse_mysql,
    "local-git": _parse_local_git,
}


def parse_source(source: str) -> SourceDescriptor:
    """Resolve a source identifier into a descriptor without touching I/O.

    ``-`` means stdin; anything that is not a URI (or has no scheme) is a
    local path; otherwise the scheme selects the descriptor kind.
    """
    if source == STDIN_SOURCE:
        return StdinSourceDescriptor()

    # A mysql DSN is not a URI (a password may hold '[' or ']'), so it is
    # recognised by prefix before urlsplit gets a chance to reject it.
    if source[:len(MYSQL_PREFIX)].lower() == MYSQL_PREFIX:
        scheme, parts = "mysql", None
    else:
        try:
            parts = urlsplit(source)
        except ValueError:
            parts = None
        if parts is None or not parts.scheme:
            if not source:
                raise MissingParameter("file", "path")
            return FileSourceDescriptor(path=source)
        scheme = parts.scheme.lower()

    parser = _SCHEME_PARSERS.get(scheme)
    if parser is None:
        raise UnsupportedScheme(scheme)

    try:
        descriptor = parser(source, parts)
    except ValidationError as e:
        raise MalformedSource(f"invalid '{scheme}' source: {e.errors()[0]['msg']}") from e
    logger.debug("resolved %s source", descriptor.kind)
    return descriptor


def new_schema_source(source: str, config: Optional[CLIConfig] = None) -> SchemaSource:
    """Resolve ``source`` and bind it to its adapter. Still performs no I/O."""
    descriptor = parse_source(source)
    factory = AdapterRegistry.get(descriptor.kind)
    if factory is None:
        raise UnsupportedScheme(descriptor.kind)
    return factory(descriptor, config)
