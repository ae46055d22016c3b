"""Interval value over an ordinal type."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Range(Generic[T]):
    """An interval with independent open/closed flags per side.

    left <= right is not enforced here; distance checks reject inverted
    intervals with WrongRange.
    """
    left: T
    right: T
    left_closed: bool = True
    right_closed: bool = True

    @property
    def open_bracket(self) -> str:
        return "[" if self.left_closed else "("

    @property
    def close_bracket(self) -> str:
        return "]" if self.right_closed else ")"

    def __str__(self) -> str:
        return f"{self.open_bracket}{self.left},{self.right}{self.close_bracket}"
