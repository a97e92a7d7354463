"""
gitwrap - a small command-line front end for everyday git work
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Stage, commit, push, inspect status and resolve merge conflicts, plus a
browser-based GitHub OAuth2 flow for obtaining a push token.

Basic usage:
    >>> from gitwrap import init_repository, commit
    >>> repo = init_repository("demo").unwrap()
    >>> commit(repo, {"README.md"}, "Initial commit")

:license: MIT, see LICENSE for more details.
"""

__version__ = "0.1.0"

from .core import (
    commit,
    conflicts,
    init_repository,
    open_repository,
    push,
    resolve,
    stage,
    status,
)
from .git.integration import GitIntegration
from .models import AccessToken, ResolutionChoice, Result, StatusSnapshot

__all__ = [
    "AccessToken",
    "GitIntegration",
    "ResolutionChoice",
    "Result",
    "StatusSnapshot",
    "commit",
    "conflicts",
    "init_repository",
    "open_repository",
    "push",
    "resolve",
    "stage",
    "status",
]
