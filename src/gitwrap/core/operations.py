"""Index, commit, push and status operations.

Each operation takes an explicit repository handle and returns a
:class:`~gitwrap.models.result.Result`. Failures from git are converted to
the matching :mod:`gitwrap.utils.errors` type here and never raised to the
caller.
"""

from typing import FrozenSet, Iterable, Optional

from ..git.integration import GitIntegration
from ..models.result import Result
from ..models.types import StatusSnapshot
from ..utils.errors import (
    CommitError, GitCommandError, PushError, StagingError, StatusQueryError
)
from ..utils.logger import Logger


def parse_paths(raw: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated CLI argument into a path set, dropping blanks."""
    if not raw:
        return frozenset()
    return frozenset(p.strip() for p in raw.split(",") if p.strip())


def stage(repo: GitIntegration, paths: Iterable[str]) -> Result[None]:
    """Add paths to the index. Order within the set is not significant."""
    paths = list(paths)
    try:
        repo.add(paths)
    except GitCommandError as e:
        return Result.failure(StagingError(f"Error adding files to the index: {e}", e))
    Logger.debug(f"Staged {len(paths)} path(s)")
    return Result.success()


def commit(repo: GitIntegration, paths: Iterable[str], message: str) -> Result[str]:
    """Stage paths and commit them; the value is the new HEAD sha.

    The message is handed to git as is, so an empty message is rejected by
    git itself. Committing with nothing staged fails the same way.
    """
    try:
        repo.add(list(paths))
        sha = repo.commit(message)
    except GitCommandError as e:
        return Result.failure(
            CommitError(f"Error adding files to the index or committing changes: {e}", e)
        )
    return Result.success(sha)


def push(repo: GitIntegration, remote_url: str, token: str) -> Result[None]:
    """Push the current branch to remote_url. One attempt, no retry."""
    try:
        repo.push(remote_url, token)
    except GitCommandError as e:
        return Result.failure(PushError(f"Error pushing changes: {e}", e))
    return Result.success()


def status(repo: GitIntegration) -> Result[StatusSnapshot]:
    try:
        return Result.success(repo.status())
    except GitCommandError as e:
        return Result.failure(StatusQueryError(f"Error retrieving repository status: {e}", e))


def untracked(repo: GitIntegration) -> Result[FrozenSet[str]]:
    try:
        return Result.success(repo.status().untracked)
    except GitCommandError as e:
        return Result.failure(StatusQueryError(f"Error retrieving untracked files: {e}", e))


def modified(repo: GitIntegration) -> Result[FrozenSet[str]]:
    try:
        return Result.success(repo.status().modified)
    except GitCommandError as e:
        return Result.failure(StatusQueryError(f"Error retrieving tracked files: {e}", e))
