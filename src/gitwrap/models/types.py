"""Core data models for gitwrap."""

from enum import Enum
from typing import FrozenSet, Optional
from pydantic import BaseModel, ConfigDict, Field


class StatusSnapshot(BaseModel):
    """
    Working tree status at one point in time.

    The three sets are disjoint and hold repository-relative paths. A
    snapshot is never cached; every status query builds a new one.
    """

    model_config = ConfigDict(frozen=True)

    untracked: FrozenSet[str] = Field(default_factory=frozenset, description="Files git does not track")
    modified: FrozenSet[str] = Field(default_factory=frozenset, description="Tracked files changed in the working tree")
    conflicting: FrozenSet[str] = Field(default_factory=frozenset, description="Files with unmerged index entries")

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicting)


class ResolutionChoice(Enum):
    """Which side of a merge conflict to keep."""

    CURRENT = 1
    INCOMING = 2
    BOTH = 3

    @property
    def label(self) -> str:
        return {
            ResolutionChoice.CURRENT: "Accept current changes",
            ResolutionChoice.INCOMING: "Accept incoming changes",
            ResolutionChoice.BOTH: "Accept both changes",
        }[self]

    @classmethod
    def from_input(cls, raw: Optional[str]) -> Optional['ResolutionChoice']:
        """Parse a menu number; anything unrecognised yields None."""
        if raw is None:
            return None
        try:
            return cls(int(raw.strip()))
        except ValueError:
            return None


class AccessToken(BaseModel):
    """OAuth2 access token returned by the GitHub token endpoint."""

    access_token: str = Field(..., min_length=1)
    token_type: Optional[str] = None
    scope: Optional[str] = None

    def __str__(self) -> str:
        return self.access_token
