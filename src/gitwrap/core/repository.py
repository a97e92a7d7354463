"""Opening and creating repositories."""

from pathlib import Path
from typing import Optional, Union

from ..git.integration import GitIntegration
from ..models.result import Result
from ..utils.config import GitConfig
from ..utils.errors import GitCommandError, RepositoryInitError, RepositoryOpenError
from ..utils.logger import Logger


def open_repository(
    path: Union[str, Path] = ".",
    config: Optional[GitConfig] = None
) -> Result[GitIntegration]:
    """Open the repository at path."""
    try:
        repo = GitIntegration.open(path, config)
    except GitCommandError as e:
        return Result.failure(RepositoryOpenError(f"Error opening repository: {e}", e))
    Logger.debug(f"Opened repository at {repo.repo_path}")
    return Result.success(repo)


def init_repository(
    path: Union[str, Path],
    config: Optional[GitConfig] = None
) -> Result[GitIntegration]:
    """Initialize a new repository at path."""
    try:
        repo = GitIntegration.init(path, config)
    except (GitCommandError, OSError) as e:
        return Result.failure(RepositoryInitError(f"Error initializing repository: {e}", e))
    return Result.success(repo)
