"""Integer Filters

Bounded integers read from text in a configurable base, or accepted as
native ints already inside the type's bounds.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Iterable

from paramfilter.coercion import (
    MAX_INT,
    MAX_INT32,
    MAX_INT64,
    MAX_UINT,
    MAX_UINT32,
    MAX_UINT64,
    MIN_INT,
    MIN_INT32,
    MIN_INT64,
    CoercionError,
    StringToInteger,
)
from paramfilter.errors import Err, Ok, Reason, Result

from .base import (
    CompiledFilter,
    FilterBuilder,
    bound_check,
    invalid_validator,
    membership_check,
    threshold_factory,
)


@dataclass(frozen=True, slots=True)
class IntegerType:
    name: str
    minimum: int
    maximum: int
    not_type: Reason

    def adopt(self, value: Any) -> Result[int, CoercionError]:
        if isinstance(value, int) and not isinstance(value, bool) and self.minimum <= value <= self.maximum:
            return Ok(value)
        return Err(CoercionError(f"{value!r} is not a {self.name}"))


INT32 = IntegerType("int32", MIN_INT32, MAX_INT32, Reason.NOT_INT32)
UINT32 = IntegerType("uint32", 0, MAX_UINT32, Reason.NOT_UINT32)
INT64 = IntegerType("int64", MIN_INT64, MAX_INT64, Reason.NOT_INT64)
UINT64 = IntegerType("uint64", 0, MAX_UINT64, Reason.NOT_UINT64)
INT = IntegerType("int", MIN_INT, MAX_INT, Reason.NOT_INT)
UINT = IntegerType("uint", 0, MAX_UINT, Reason.NOT_UINT)


def coerce_integer(int_type: IntegerType, rule: StringToInteger, value: Any) -> Result[int, CoercionError]:
    if isinstance(value, str):
        return rule.coerce(value)
    return int_type.adopt(value)


class IntegerFilterBuilder(FilterBuilder[int]):
    """min/max/larger_than/smaller_than/equal/between/in_ over one integer type."""

    kind = "integer"

    def __init__(self, int_type: IntegerType) -> None:
        super().__init__()
        self._type = int_type
        self._base = 10

    def base(self, base: int) -> IntegerFilterBuilder:
        """Text base: 2..36, or 0 to infer it from the literal prefix."""
        self._base = base
        return self

    def _bounded(self, low: Any = None, high: Any = None, strict: bool = False) -> IntegerFilterBuilder:
        return self._register(threshold_factory(
            self._type.name,
            lambda _context, raw: self._type.adopt(raw),
            (low, high),
            lambda lo, hi: bound_check(
                lo, hi, strict=strict, low_reason=Reason.TOO_SMALL, high_reason=Reason.TOO_LARGE,
            ),
        ))

    def min(self, value: int) -> IntegerFilterBuilder:
        return self._bounded(low=value)

    def max(self, value: int) -> IntegerFilterBuilder:
        return self._bounded(high=value)

    def larger_than(self, value: int) -> IntegerFilterBuilder:
        return self._bounded(low=value, strict=True)

    def smaller_than(self, value: int) -> IntegerFilterBuilder:
        return self._bounded(high=value, strict=True)

    def equal(self, value: int) -> IntegerFilterBuilder:
        return self._bounded(low=value, high=value)

    def between(self, minimum: int, maximum: int) -> IntegerFilterBuilder:
        return self._bounded(low=minimum, high=maximum)

    def in_(self, values: Iterable[int]) -> IntegerFilterBuilder:
        members = tuple(values)
        return self._register(lambda _context: membership_check(members))

    def _compile(self, context: Any, checks: tuple) -> CompiledFilter[int]:
        base = self._base
        if base != 0 and not 2 <= base <= 36:
            checks = (invalid_validator(self._type.name, f"invalid base {base}"), *checks)
            base = 10
        rule = StringToInteger(self._type.minimum, self._type.maximum, base)
        return CompiledFilter(
            kind=self._type.name,
            coerce=partial(coerce_integer, self._type, rule),
            not_type=self._type.not_type,
            checks=checks,
            allow_values=tuple(self._allow),
        )


def int32() -> IntegerFilterBuilder:
    return IntegerFilterBuilder(INT32)


def uint32() -> IntegerFilterBuilder:
    return IntegerFilterBuilder(UINT32)


def int64() -> IntegerFilterBuilder:
    return IntegerFilterBuilder(INT64)


def uint64() -> IntegerFilterBuilder:
    return IntegerFilterBuilder(UINT64)


def int_() -> IntegerFilterBuilder:
    """Platform int (64-bit)."""
    return IntegerFilterBuilder(INT)


def uint() -> IntegerFilterBuilder:
    """Platform uint (64-bit)."""
    return IntegerFilterBuilder(UINT)
