"""String Filters

Lengths are counted in characters, not encoded bytes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Any, Iterable, TypeVar

from paramfilter.coercion import MAX_UINT64, CoercionError, StringToInteger
from paramfilter.errors import Err, FilterError, Ok, Reason, Result, invalid_param

from .base import (
    TRIM_CHARS,
    CompiledFilter,
    FilterBuilder,
    bound_check,
    invalid_validator,
    membership_check,
)

S = TypeVar("S", bound="LengthChecks")

_UNSIGNED = StringToInteger(0, MAX_UINT64, base=0)
_ASCII_DIGITS = frozenset("0123456789")
_ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


class Case(str, Enum):
    KEEP = "keep"
    LOWER = "lower"
    UPPER = "upper"

    def apply(self, text: str) -> str:
        if self is Case.LOWER:
            return text.lower()
        if self is Case.UPPER:
            return text.upper()
        return text


class LengthChecks(FilterBuilder[str]):
    """Length vocabulary shared by string-valued filters."""

    def _length(self: S, low: int | None = None, high: int | None = None, strict: bool = False) -> S:
        check = bound_check(
            low, high, strict=strict,
            low_reason=Reason.TOO_SHORT, high_reason=Reason.TOO_LONG, measure=len,
        )
        return self.add_validator(check)

    def length(self: S, length: int) -> S:
        return self._length(length, length)

    def min_len(self: S, length: int) -> S:
        return self._length(low=length)

    def max_len(self: S, length: int) -> S:
        return self._length(high=length)

    def longer_than(self: S, length: int) -> S:
        return self._length(low=length, strict=True)

    def shorter_than(self: S, length: int) -> S:
        return self._length(high=length, strict=True)

    def between(self: S, min_length: int, max_length: int) -> S:
        """Length within [min_length, max_length]."""
        return self._length(min_length, max_length)

    def keep_case(self: S) -> S:
        self._case = Case.KEEP
        return self

    def to_lower(self: S) -> S:
        self._case = Case.LOWER
        return self

    def to_upper(self: S) -> S:
        self._case = Case.UPPER
        return self


@dataclass(frozen=True, slots=True)
class StringShape:
    case: Case
    trim: bool

    def coerce(self, value: Any) -> Result[str, CoercionError]:
        if not isinstance(value, str):
            return Err(CoercionError(f"{type(value).__name__} is not a string"))
        value = self.case.apply(value)
        if self.trim:
            value = value.strip(TRIM_CHARS)
        return Ok(value)


def _all_in(charset: frozenset[str], reason: Reason):
    def check(name: str, value: str) -> FilterError | None:
        if all(c in charset for c in value):
            return None
        return invalid_param(name, reason)

    return check


class StringFilterBuilder(LengthChecks):
    """Plain strings. The allow-list is matched against the raw value,
    before any case transform or trimming."""

    kind = "string"

    def __init__(self) -> None:
        super().__init__()
        self._case = Case.KEEP
        self._trim = False

    def trim(self) -> StringFilterBuilder:
        """Strip spaces, tabs and line breaks before validation."""
        self._trim = True
        return self

    def match(self, pattern: str) -> StringFilterBuilder:
        """Value must contain a match for pattern (re.search)."""

        def factory(_context: Any):
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                return invalid_validator(self.kind, f"bad pattern {pattern!r}: {e}")

            def check(name: str, value: str) -> FilterError | None:
                if compiled.search(value) is None:
                    return invalid_param(name, Reason.WRONG_FORMAT)
                return None

            return check

        return self._register(factory)

    def is_numeric(self) -> StringFilterBuilder:
        """An unsigned 64-bit literal, prefix-inferred base (0x, 0o, 0b, 0)."""

        def check(name: str, value: str) -> FilterError | None:
            return None if _UNSIGNED.can_coerce(value) else invalid_param(name, Reason.NOT_NUMERIC)

        return self.add_validator(check)

    def is_digit(self) -> StringFilterBuilder:
        return self.add_validator(_all_in(_ASCII_DIGITS, Reason.NOT_DIGIT))

    def is_alpha(self) -> StringFilterBuilder:
        return self.add_validator(_all_in(_ASCII_LETTERS, Reason.NOT_ALPHA))

    def is_alphanumeric(self) -> StringFilterBuilder:
        return self.add_validator(_all_in(_ASCII_DIGITS | _ASCII_LETTERS, Reason.NOT_ALPHA_NUMERIC))

    def in_(self, values: Iterable[str]) -> StringFilterBuilder:
        members = tuple(values)
        return self._register(lambda _context: membership_check(members))

    def _compile(self, context: Any, checks: tuple) -> CompiledFilter[str]:
        return CompiledFilter(
            kind=self.kind,
            coerce=StringShape(self._case, self._trim).coerce,
            not_type=Reason.NOT_STRING,
            checks=checks,
            allow_values=tuple(self._allow),
            trim=False,
        )


def string() -> StringFilterBuilder:
    return StringFilterBuilder()
