"""Data models for gitwrap."""

from .result import Result
from .types import AccessToken, ResolutionChoice, StatusSnapshot

__all__ = [
    "AccessToken",
    "ResolutionChoice",
    "Result",
    "StatusSnapshot",
]
