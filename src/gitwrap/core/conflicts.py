"""Merge conflict detection and resolution."""

from typing import FrozenSet, Iterable

from ..git.integration import GitIntegration
from ..models.result import Result
from ..models.types import ResolutionChoice
from ..utils.errors import CheckoutError, ConflictQueryError, GitCommandError
from ..utils.logger import Logger

# Sides checked out per choice, in order. BOTH ends on theirs for every path.
_SIDES = {
    ResolutionChoice.CURRENT: ("ours",),
    ResolutionChoice.INCOMING: ("theirs",),
    ResolutionChoice.BOTH: ("ours", "theirs"),
}


def conflicts(repo: GitIntegration) -> Result[FrozenSet[str]]:
    """List paths with unmerged index entries."""
    try:
        return Result.success(repo.status().conflicting)
    except GitCommandError as e:
        return Result.failure(ConflictQueryError(f"Error resolving conflicts: {e}", e))


def resolve(
    repo: GitIntegration,
    paths: Iterable[str],
    choice: ResolutionChoice
) -> Result[None]:
    """Check out the chosen side(s) for every conflicted path.

    Each side is applied to all paths before the next side starts. The
    first failing checkout stops the run; earlier checkouts stay on disk.
    """
    paths = sorted(paths)
    for side in _SIDES[choice]:
        for path in paths:
            try:
                repo.checkout_stage(path, side)
            except GitCommandError as e:
                return Result.failure(CheckoutError(f"Error resolving conflicts: {e}", e))
            Logger.debug(f"Checked out {side} for {path}")
    return Result.success()
