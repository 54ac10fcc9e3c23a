"""Explicit success/failure values.

Decode and materialization steps return one of these instead of raising, so a
failed step never leaves a half-built ``Response`` behind. Construction-time
errors are still raised as exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful result."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A failed result carrying the error."""

    error: E

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        """Raise the carried error."""
        raise self.error


Result = Union[Success[T], Failure[E]]

__all__ = ["Success", "Failure", "Result"]
