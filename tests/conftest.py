from pathlib import Path
from typing import Dict

import git
import pytest

SCHEMA_V1 = "CREATE TABLE users (id BIGINT NOT NULL, PRIMARY KEY (id));\n"
SCHEMA_V2 = (
    "CREATE TABLE users (id BIGINT NOT NULL, email VARCHAR(255), PRIMARY KEY (id));\n\n"
    "CREATE TABLE orders (id BIGINT NOT NULL, user_id BIGINT, PRIMARY KEY (id));\n"
)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    p = tmp_path / "schema.sql"
    p.write_text(SCHEMA_V2)
    return p


@pytest.fixture
def git_repo(tmp_path: Path):
    """A repository with a commit factory: commit({path: content}, message) -> Commit."""
    repo = git.Repo.init(tmp_path / "repo")
    actor = git.Actor("schemalint", "schemalint@example.com")

    def commit(files: Dict[str, str], message: str) -> git.Commit:
        for name, content in files.items():
            p = Path(repo.working_tree_dir) / name
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(content)
            repo.index.add([str(p)])
        return repo.index.commit(message, author=actor, committer=actor)

    yield repo, commit
    repo.close()
