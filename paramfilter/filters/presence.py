"""Presence Filters

Small filters that only look at whether a value was supplied. They are
immutable from the start and need no build() step.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from paramfilter.errors import Err, FilterError, Ok, Result, missing_param


@dataclass(frozen=True, slots=True)
class RequiredFilter:
    """None is MissingParam; anything else passes through."""

    def build(self) -> RequiredFilter:
        return self

    def run(self, name: str, value: Any) -> Result[Any, FilterError]:
        if value is None:
            return Err(missing_param(name))
        return Ok(value)


@dataclass(frozen=True, slots=True)
class DefaultFilter:
    value: Any

    def build(self) -> DefaultFilter:
        return self

    def run(self, name: str, value: Any) -> Result[Any, FilterError]:
        return Ok(self.value if value is None else value)


@dataclass(frozen=True, slots=True)
class EmptyToNilFilter:
    def build(self) -> EmptyToNilFilter:
        return self

    def run(self, name: str, value: Any) -> Result[Any, FilterError]:
        return Ok(None if isinstance(value, str) and value == "" else value)


def required() -> RequiredFilter:
    return RequiredFilter()


def default(value: Any) -> DefaultFilter:
    return DefaultFilter(value)


def empty_to_nil() -> EmptyToNilFilter:
    """Treat an empty string as absent."""
    return EmptyToNilFilter()
