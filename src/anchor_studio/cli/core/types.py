"""Core types for CLI - immutable data structures and Result type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """Failed result containing an error message."""

    error: str
    details: dict[str, Any] | None = None

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True


# Result type - either Success[T] or Failure
Result = Union[Success[T], Failure]
