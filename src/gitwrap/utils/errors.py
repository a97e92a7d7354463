"""Custom exceptions for gitwrap."""

from typing import Optional, Sequence


class GitWrapError(Exception):
    """Base exception for all gitwrap errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

class GitCommandError(GitWrapError):
    """Raised when a git invocation fails or git cannot be started."""

    def __init__(
        self,
        args: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
        cause: Optional[BaseException] = None
    ):
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or (str(cause) if cause else "unknown error")
        super().__init__(detail, cause)

class RepositoryOpenError(GitWrapError):
    """Raised when a working directory is not a repository."""
    pass

class RepositoryInitError(GitWrapError):
    """Raised when a repository cannot be created."""
    pass

class StagingError(GitWrapError):
    """Raised when files cannot be added to the index."""
    pass

class CommitError(GitWrapError):
    """Raised for commit-related errors."""
    pass

class PushError(GitWrapError):
    """Raised when pushing to a remote fails."""
    pass

class StatusQueryError(GitWrapError):
    """Raised when repository status cannot be read."""
    pass

class ConflictQueryError(GitWrapError):
    """Raised when conflicted paths cannot be listed."""
    pass

class CheckoutError(GitWrapError):
    """Raised when a conflict side cannot be checked out."""
    pass

class TokenExchangeError(GitWrapError):
    """Raised when an authorization code cannot be exchanged for a token."""
    pass

class ListenerError(GitWrapError):
    """Raised for OAuth callback listener errors."""
    pass

class ConfigurationError(GitWrapError):
    """Raised for configuration errors."""
    pass
