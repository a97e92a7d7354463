"""Tagged success/failure values returned by core operations."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ..utils.errors import GitWrapError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of one operation: a value, or the error that stopped it."""

    value: Optional[T] = None
    error: Optional[GitWrapError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> 'Result[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: GitWrapError) -> 'Result[T]':
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
