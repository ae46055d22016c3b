"""Float Filters"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import partial
import math
from typing import Any, Iterable

from paramfilter.coercion import CoercionError, StringToFloat
from paramfilter.errors import Err, FilterError, Ok, Reason, Result, invalid_param

from .base import (
    CompiledFilter,
    FilterBuilder,
    bound_check,
    membership_check,
    threshold_factory,
)


@dataclass(frozen=True, slots=True)
class FloatType:
    name: str
    max_magnitude: float
    not_type: Reason

    @property
    def rule(self) -> StringToFloat:
        return StringToFloat(self.max_magnitude)

    def adopt(self, value: Any) -> Result[float, CoercionError]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return Err(CoercionError(f"{value!r} is not a {self.name}"))
        try:
            number = float(value)
        except OverflowError as e:
            return Err(CoercionError(f"{value!r} is not a {self.name}: {e}"))
        if math.isfinite(number) and abs(number) > self.max_magnitude:
            return Err(CoercionError(f"{value!r} exceeds {self.max_magnitude}"))
        return Ok(number)


FLOAT32 = FloatType("float32", 3.4028234663852886e38, Reason.NOT_FLOAT32)
FLOAT64 = FloatType("float64", 1.7976931348623157e308, Reason.NOT_FLOAT64)


def coerce_float(float_type: FloatType, value: Any) -> Result[float, CoercionError]:
    if isinstance(value, str):
        return float_type.rule.coerce(value)
    return float_type.adopt(value)


def decimal_places(value: float) -> int:
    """Digits after the point in the shortest repr of value."""
    exponent = Decimal(repr(value)).as_tuple().exponent
    return max(0, -exponent) if isinstance(exponent, int) else 0


class FloatFilterBuilder(FilterBuilder[float]):
    kind = "float"

    def __init__(self, float_type: FloatType) -> None:
        super().__init__()
        self._type = float_type

    def _bounded(self, low: Any = None, high: Any = None, strict: bool = False) -> FloatFilterBuilder:
        return self._register(threshold_factory(
            self._type.name,
            lambda _context, raw: self._type.adopt(raw),
            (low, high),
            lambda lo, hi: bound_check(
                lo, hi, strict=strict, low_reason=Reason.TOO_SMALL, high_reason=Reason.TOO_LARGE,
            ),
        ))

    def min(self, value: float) -> FloatFilterBuilder:
        return self._bounded(low=value)

    def max(self, value: float) -> FloatFilterBuilder:
        return self._bounded(high=value)

    def larger_than(self, value: float) -> FloatFilterBuilder:
        return self._bounded(low=value, strict=True)

    def smaller_than(self, value: float) -> FloatFilterBuilder:
        return self._bounded(high=value, strict=True)

    def equal(self, value: float) -> FloatFilterBuilder:
        return self._bounded(low=value, high=value)

    def between(self, minimum: float, maximum: float) -> FloatFilterBuilder:
        return self._bounded(low=minimum, high=maximum)

    def in_(self, values: Iterable[float]) -> FloatFilterBuilder:
        members = tuple(values)
        return self._register(lambda _context: membership_check(members))

    def decimal_place(self, places: int) -> FloatFilterBuilder:
        """Reject values with more than `places` digits after the decimal point."""

        def check(name: str, value: float) -> FilterError | None:
            if math.isfinite(value) and decimal_places(value) > places:
                return invalid_param(name, Reason.DECIMAL_PLACE_NOT_MATCH)
            return None

        return self.add_validator(check)

    def _compile(self, context: Any, checks: tuple) -> CompiledFilter[float]:
        return CompiledFilter(
            kind=self._type.name,
            coerce=partial(coerce_float, self._type),
            not_type=self._type.not_type,
            checks=checks,
            allow_values=tuple(self._allow),
        )


def float32() -> FloatFilterBuilder:
    return FloatFilterBuilder(FLOAT32)


def float64() -> FloatFilterBuilder:
    return FloatFilterBuilder(FLOAT64)
