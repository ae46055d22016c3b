"""Ordinal Domains

A domain describes one endpoint type of a range: its extrema, the unit a
bound moves by when it is open, how its distances are measured, and how
its endpoints are read from and written to text.

Integer domains measure distance with Python's arbitrary-precision ints, so
right - left never overflows, even across [MinInt64, MaxInt64] or
[0, MaxUint64]. The date/time domain measures distance as a timedelta and
moves bounds by one second.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, ClassVar, Generic, TypeVar

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
    DurationToTimedelta,
    StringToDateTime,
    StringToInteger,
)
from paramfilter.errors import Err, Ok, Reason, Result
from paramfilter.filters.layout import adopt_datetime

T = TypeVar("T")
D = TypeVar("D")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class OrdinalDomain(ABC, Generic[T, D]):
    """Endpoint type of a range.

    Concrete domains provide min_value, max_value, unit (one step, of the
    distance type D), zero (the empty distance) and not_range (the reason
    code reported when a value is not a range of this domain).
    """
    name: str
    min_value: T
    max_value: T
    not_range: Reason
    unit: D
    zero: D

    def step_down(self, value: T) -> T:
        """value - unit, saturating at min_value."""
        if value - self.min_value >= self.unit:
            return value - self.unit
        return value

    def step_up(self, value: T) -> T:
        """value + unit, saturating at max_value."""
        if self.max_value - value >= self.unit:
            return value + self.unit
        return value

    def distance(self, left: T, right: T) -> D:
        return right - left

    def default_left(self) -> T:
        return self.min_value

    def default_right(self) -> T:
        return self.max_value

    @abstractmethod
    def adopt(self, value: Any) -> Result[T, CoercionError]:
        """Accept a native endpoint or threshold belonging to this domain."""

    @abstractmethod
    def parse(self, text: str) -> Result[T, CoercionError]:
        """Read one endpoint from text."""

    @abstractmethod
    def format(self, value: T) -> str:
        """Write one endpoint as text."""

    @abstractmethod
    def span(self, value: Any) -> Result[D, CoercionError]:
        """Accept a distance threshold (non-negative, in units of D)."""


@dataclass(frozen=True, slots=True)
class IntegerDomain(OrdinalDomain[int, int]):
    """Bounded integer endpoints (int32, uint64, timestamps, ...)."""
    name: str
    min_value: int
    max_value: int
    not_range: Reason
    base: int = 10

    unit: ClassVar[int] = 1
    zero: ClassVar[int] = 0

    def contains(self, value: Any) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and self.min_value <= value <= self.max_value
        )

    def adopt(self, value: Any) -> Result[int, CoercionError]:
        if self.contains(value):
            return Ok(value)
        return Err(CoercionError(f"{value!r} is not a {self.name} value"))

    def parse(self, text: str) -> Result[int, CoercionError]:
        return StringToInteger(self.min_value, self.max_value, self.base).coerce(text)

    def format(self, value: int) -> str:
        return str(value)

    def span(self, value: Any) -> Result[int, CoercionError]:
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return Ok(value)
        return Err(CoercionError(f"{value!r} is not a non-negative distance"))


@dataclass(frozen=True, slots=True)
class DateTimeDomain(OrdinalDomain[datetime, timedelta]):
    """Aware datetime endpoints parsed with a strptime layout in an explicit zone."""
    layout: str
    zone: tzinfo

    name: ClassVar[str] = "time"
    not_range: ClassVar[Reason] = Reason.NOT_TIME_RANGE
    min_value: ClassVar[datetime] = datetime.min.replace(tzinfo=timezone.utc)
    max_value: ClassVar[datetime] = datetime.max.replace(tzinfo=timezone.utc)
    unit: ClassVar[timedelta] = timedelta(seconds=1)
    zero: ClassVar[timedelta] = timedelta(0)

    @property
    def rule(self) -> StringToDateTime:
        return StringToDateTime(self.layout, self.zone)

    def _truncate(self, value: datetime) -> datetime:
        """Round-trip through the layout, dropping what it cannot express."""
        return self.rule.coerce(self.rule.render(value)).unwrap_or(value)

    # Aware arithmetic moves the wall clock, so headroom is measured against
    # the naive datetime range rather than the UTC extrema.
    def step_down(self, value: datetime) -> datetime:
        if value.replace(tzinfo=None) - datetime.min >= self.unit:
            return value - self.unit
        return value

    def step_up(self, value: datetime) -> datetime:
        if datetime.max - value.replace(tzinfo=None) >= self.unit:
            return value + self.unit
        return value

    def default_left(self) -> datetime:
        return self._truncate(EPOCH)

    def default_right(self) -> datetime:
        return self._truncate(datetime.now(self.zone))

    def adopt(self, value: Any) -> Result[datetime, CoercionError]:
        return adopt_datetime(self.rule, value)

    def parse(self, text: str) -> Result[datetime, CoercionError]:
        return self.rule.coerce(text)

    def format(self, value: datetime) -> str:
        return self.rule.render(value)

    def span(self, value: Any) -> Result[timedelta, CoercionError]:
        return DurationToTimedelta().coerce(value)


INT32 = IntegerDomain("int32", MIN_INT32, MAX_INT32, Reason.NOT_INT32_RANGE)
UINT32 = IntegerDomain("uint32", 0, MAX_UINT32, Reason.NOT_UINT32_RANGE)
INT64 = IntegerDomain("int64", MIN_INT64, MAX_INT64, Reason.NOT_INT64_RANGE)
UINT64 = IntegerDomain("uint64", 0, MAX_UINT64, Reason.NOT_UINT64_RANGE)
INT = IntegerDomain("int", MIN_INT, MAX_INT, Reason.NOT_INT_RANGE)
UINT = IntegerDomain("uint", 0, MAX_UINT, Reason.NOT_UINT_RANGE)
TIMESTAMP = IntegerDomain("timestamp", 0, MAX_UINT32, Reason.NOT_TIMESTAMP_RANGE)
