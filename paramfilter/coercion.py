"""Explicit Coercion Rules

Text-to-native conversions shared by the scalar filters and the range
endpoint parser. Each rule is a frozen, reusable value and reports failure
through a Result instead of raising.

Features:
- Bounded integer parsing with configurable base
- Float parsing with a magnitude limit (float32 vs float64)
- Layout-driven date/time parsing in an explicit time zone
- Duration strings to timedelta (whole seconds only)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
import math
import re
from typing import Any, Generic, TypeVar

from .errors import Err, Ok, Result

T = TypeVar("T")
S = TypeVar("S")

_OCTAL_LITERAL = re.compile(r"[+-]?0[0-7]+")

MIN_INT32, MAX_INT32 = -(1 << 31), (1 << 31) - 1
MAX_UINT32 = (1 << 32) - 1
MIN_INT64, MAX_INT64 = -(1 << 63), (1 << 63) - 1
MAX_UINT64 = (1 << 64) - 1

# Platform int/uint follow a 64-bit word.
MIN_INT, MAX_INT = MIN_INT64, MAX_INT64
MAX_UINT = MAX_UINT64


class CoercionError(ValueError):
    """Raised (or carried in Err) when text cannot become the target type."""


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[S, T]):
    """Base class for coercion rules."""

    @property
    @abstractmethod
    def target_type(self) -> type[T]:
        """Type this rule coerces to."""

    @abstractmethod
    def coerce(self, value: Any) -> Result[T, CoercionError]:
        """Coerce value to target type. Returns Result."""

    def can_coerce(self, value: Any) -> bool:
        return self.coerce(value).is_ok()

    def __call__(self, value: Any) -> Result[T, CoercionError]:
        return self.coerce(value)


@dataclass(frozen=True, slots=True)
class StringToInteger(CoercionRule[str, int]):
    """Coerce string to a bounded integer.

    base follows the usual convention: 2..36, or 0 to infer the base from
    the literal's prefix (0x, 0o, 0b, or a leading 0 for octal).
    """
    minimum: int
    maximum: int
    base: int = 10

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, value: Any) -> Result[int, CoercionError]:
        if not isinstance(value, str):
            return Err(CoercionError(f"Cannot coerce {type(value).__name__} to int"))
        if not value or not value.isascii() or "_" in value or any(c.isspace() for c in value):
            return Err(CoercionError(f"Invalid integer literal: {value!r}"))

        try:
            if self.base == 0 and _OCTAL_LITERAL.fullmatch(value):
                number = int(value, 8)
            else:
                number = int(value, self.base)
        except ValueError as e:
            return Err(CoercionError(f"Cannot coerce {value!r} to int: {e}"))

        if not self.minimum <= number <= self.maximum:
            return Err(CoercionError(f"{number} outside [{self.minimum}, {self.maximum}]"))
        return Ok(number)


@dataclass(frozen=True, slots=True)
class StringToFloat(CoercionRule[str, float]):
    """Coerce string to float, rejecting finite values beyond max_magnitude."""
    max_magnitude: float = 1.7976931348623157e308

    @property
    def target_type(self) -> type[float]:
        return float

    def coerce(self, value: Any) -> Result[float, CoercionError]:
        if not isinstance(value, str):
            return Err(CoercionError(f"Cannot coerce {type(value).__name__} to float"))
        if not value or not value.isascii() or "_" in value:
            return Err(CoercionError(f"Invalid float literal: {value!r}"))

        try:
            number = float(value)
        except ValueError as e:
            return Err(CoercionError(f"Cannot coerce {value!r} to float: {e}"))

        if math.isinf(number) and value.lstrip("+-").lower() not in ("inf", "infinity"):
            return Err(CoercionError(f"{value!r} overflows float"))
        if math.isfinite(number) and abs(number) > self.max_magnitude:
            return Err(CoercionError(f"{value!r} exceeds {self.max_magnitude}"))
        return Ok(number)


@dataclass(frozen=True, slots=True)
class StringToDateTime(CoercionRule[str, datetime]):
    """Coerce string to an aware datetime using a strptime layout.

    Naive results are placed in `zone`; layouts carrying %z keep their offset.
    """
    layout: str
    zone: tzinfo

    @property
    def target_type(self) -> type[datetime]:
        return datetime

    def coerce(self, value: Any) -> Result[datetime, CoercionError]:
        if not isinstance(value, str):
            return Err(CoercionError(f"Cannot coerce {type(value).__name__} to datetime"))

        try:
            parsed = datetime.strptime(value, self.layout)
        except ValueError as e:
            return Err(CoercionError(f"Cannot coerce {value!r} to datetime: {e}"))

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=self.zone)
        return Ok(parsed)

    def render(self, value: datetime) -> str:
        """Format a datetime back through the layout, in this zone."""
        return value.astimezone(self.zone).strftime(self.layout)


@dataclass(frozen=True, slots=True)
class DurationToTimedelta(CoercionRule[str, timedelta]):
    """Coerce duration string to timedelta.

    Supports formats:
    - ISO8601: "P1DT2H30M" (1 day, 2 hours, 30 minutes)
    - Simple: "1d", "2h", "30m", "45s"
    - Combined: "1d2h30m"

    Sub-second units are rejected; range distances count whole seconds.
    """

    UNIT_MAP = {
        "d": "days", "day": "days", "days": "days",
        "h": "hours", "hr": "hours", "hour": "hours", "hours": "hours",
        "m": "minutes", "min": "minutes", "minute": "minutes", "minutes": "minutes",
        "s": "seconds", "sec": "seconds", "second": "seconds", "seconds": "seconds",
    }

    @property
    def target_type(self) -> type[timedelta]:
        return timedelta

    def _parse(self, value: str) -> timedelta:
        value = value.strip().lower()

        if value.startswith("p"):
            return self._parse_iso8601(value)

        if not re.fullmatch(r"(?:\d+(?:\.\d+)?\s*[a-z]+\s*)+", value):
            raise ValueError(f"Invalid duration format: {value}")

        kwargs: dict[str, float] = {}
        for num_str, unit in re.findall(r"(\d+(?:\.\d+)?)\s*([a-z]+)", value):
            unit_key = self.UNIT_MAP.get(unit)
            if not unit_key:
                raise ValueError(f"Unknown duration unit: {unit}")
            kwargs[unit_key] = kwargs.get(unit_key, 0) + float(num_str)

        return timedelta(**kwargs)

    def _parse_iso8601(self, value: str) -> timedelta:
        """Parse ISO8601 duration (P1DT2H30M)."""
        match = re.fullmatch(r"P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?", value.upper())
        if not match or value.upper() in ("P", "PT"):
            raise ValueError(f"Invalid ISO8601 duration: {value}")

        days, hours, minutes, seconds = (int(g or 0) for g in match.groups())
        return timedelta(days=days, hours=hours, minutes=minutes, seconds=seconds)

    def coerce(self, value: Any) -> Result[timedelta, CoercionError]:
        try:
            if isinstance(value, timedelta):
                duration = value
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                duration = timedelta(seconds=value)
            elif isinstance(value, str):
                duration = self._parse(value)
            else:
                return Err(CoercionError(f"Cannot coerce {type(value).__name__} to timedelta"))
        except (ValueError, OverflowError) as e:
            return Err(CoercionError(f"Cannot coerce {value!r} to timedelta: {e}"))

        if duration < timedelta(0):
            return Err(CoercionError(f"Negative duration: {value!r}"))
        if duration.microseconds:
            return Err(CoercionError(f"Sub-second duration: {value!r}"))
        return Ok(duration)
