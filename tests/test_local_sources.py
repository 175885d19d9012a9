import io
import os

import pytest

from schemalint.core.errors import SourceNotFound
from schemalint.core.resolver import new_schema_source


def _read(source: str) -> bytes:
    buf = io.BytesIO()
    new_schema_source(source).write_schema(buf)
    return buf.getvalue()


def test_path_and_file_uri_read_identically(schema_file):
    assert _read(str(schema_file)) == _read(f"file://{schema_file}")
    assert _read(str(schema_file)) == schema_file.read_bytes()


def test_missing_file(tmp_path):
    with pytest.raises(SourceNotFound):
        _read(str(tmp_path / "missing.sql"))


def test_directory_is_not_a_schema(tmp_path):
    with pytest.raises(SourceNotFound):
        _read(str(tmp_path))


@pytest.mark.skipif(os.geteuid() == 0, reason="root ignores file permissions")
def test_unreadable_file(tmp_path):
    p = tmp_path / "secret.sql"
    p.write_text("CREATE TABLE t (id INT);")
    p.chmod(0)
    with pytest.raises(SourceNotFound):
        _read(str(p))


def test_stdin_reads_to_end(monkeypatch):
    # larger than any single read buffer
    payload = b"CREATE TABLE t (id INT);\n" * 100_000
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(payload)))
    assert _read("-") == payload


def test_stdin_with_explicit_stream():
    from schemalint.adapters.stdin.adapter import StdinSource
    from schemalint.core.descriptor import StdinSourceDescriptor

    buf = io.BytesIO()
    StdinSource(StdinSourceDescriptor(), stream=io.BytesIO(b"abc")).write_schema(buf)
    assert buf.getvalue() == b"abc"
