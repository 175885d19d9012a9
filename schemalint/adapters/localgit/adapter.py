from __future__ import annotations

import logging
from typing import BinaryIO

import git
from git.exc import BadName, BadObject, CommandError

from schemalint.adapters.base import SchemaSource
from schemalint.core.descriptor import LocalGitSourceDescriptor
from schemalint.core.errors import PathNotFound, RefNotFound, SourceNotFound, SourceReadError

logger = logging.getLogger(__name__)


class LocalGitSource(SchemaSource):
    """Reads one file as it exists at a given commit of a local repository."""

    descriptor: LocalGitSourceDescriptor

    def _resolve_commit(self, repo: git.Repo) -> git.Commit:
        commitish = self.descriptor.commitish
        try:
            if commitish is None:
                return repo.head.commit
            return repo.commit(commitish)
        except (BadName, BadObject, ValueError) as e:
            # ValueError: HEAD is unborn, or the name is not a commit
            raise RefNotFound(commitish or "HEAD", str(e)) from e

    def _find_blob(self, commit: git.Commit) -> git.Blob:
        path = self.descriptor.file.strip("/")
        try:
            obj = commit.tree / path
        except KeyError as e:
            raise PathNotFound(self.descriptor.file, commit.hexsha) from e
        if obj.type != "blob":
            raise PathNotFound(self.descriptor.file, commit.hexsha)
        return obj

    def write_schema(self, sink: BinaryIO) -> None:
        repo_path = self.descriptor.repo_path
        try:
            repo = git.Repo(repo_path)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            raise SourceNotFound(f"no git repository at {repo_path}") from e
        try:
            commit = self._resolve_commit(repo)
            logger.debug("resolved %s to %s", self.descriptor.commitish or "HEAD", commit.hexsha)
            self._find_blob(commit).stream_data(sink)
        except CommandError as e:
            # GitCommandError, or GitCommandNotFound when no git binary is on PATH
            raise SourceReadError(f"git failed reading {self.descriptor.file}: {e}") from e
        finally:
            # also reaps the cat-file helpers spawned for the blob lookup
            repo.close()
