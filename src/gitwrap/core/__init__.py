"""Repository operations behind the gitwrap commands."""

from .conflicts import conflicts, resolve
from .operations import commit, modified, parse_paths, push, stage, status, untracked
from .repository import init_repository, open_repository

__all__ = [
    "commit",
    "conflicts",
    "init_repository",
    "modified",
    "open_repository",
    "parse_paths",
    "push",
    "resolve",
    "stage",
    "status",
    "untracked",
]
