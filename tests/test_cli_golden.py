from pathlib import Path
import subprocess
import sys


def test_cli_lints_example_schema(tmp_path: Path):
    root = Path(__file__).resolve().parents[1]
    out = tmp_path / "linted.sql"

    cmd = [
        sys.executable,
        "-m",
        "schemalint.cli",
        "-o",
        str(out),
        str(root / "examples/schema.sql"),
    ]
    subprocess.check_call(cmd, cwd=root)

    sql = out.read_text()
    blocks = sql.split(";\n\n")
    assert blocks[-1] == ""
    assert len(blocks) == 3

    # users is referenced by orders but stays first, as in the source
    assert blocks[0].startswith("CREATE TABLE users")
    assert blocks[1].startswith("CREATE TABLE orders")
    assert "REFERENCES users" in blocks[1]


def test_cli_version_ignores_other_arguments():
    root = Path(__file__).resolve().parents[1]
    proc = subprocess.run(
        [sys.executable, "-m", "schemalint.cli", "-v", "too", "many", "args"],
        capture_output=True,
        text=True,
        cwd=root,
    )
    assert proc.returncode == 0
    assert "version" in proc.stdout


def test_cli_failure_prints_a_single_stderr_line(tmp_path: Path):
    root = Path(__file__).resolve().parents[1]
    src = tmp_path / "trigger.sql"
    src.write_text(
        "CREATE TRIGGER trg BEFORE INSERT ON t FOR EACH ROW SET NEW.a = 1;\n"
        "CREATE TABLE t (id INT\n"
    )
    proc = subprocess.run(
        [sys.executable, "-m", "schemalint.cli", str(src)],
        capture_output=True,
        text=True,
        cwd=root,
    )
    assert proc.returncode == 1
    assert proc.stdout == ""
    assert len(proc.stderr.strip().splitlines()) == 1
    assert "failed to parse source" in proc.stderr
