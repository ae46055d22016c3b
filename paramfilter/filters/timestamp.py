"""Timestamp Filter

Unix seconds as uint32, from decimal text or a native int.
"""
from __future__ import annotations

from abc import abstractmethod
from functools import partial
from typing import Any, TypeVar

from paramfilter.coercion import MAX_UINT32, StringToInteger
from paramfilter.errors import Reason

from .base import CompiledFilter, FilterBuilder, bound_check, threshold_factory
from .integer import IntegerType, coerce_integer

C = TypeVar("C", bound="ChronoChecks")

TIMESTAMP = IntegerType("timestamp", 0, MAX_UINT32, Reason.NOT_TIMESTAMP)


class ChronoChecks(FilterBuilder[Any]):
    """start_from/end_to/after/before/equal/between for instants.

    Subclasses define _adopt(context, raw) for their threshold type.
    """

    @abstractmethod
    def _adopt(self, context: Any, raw: Any):
        """Read one threshold in this builder's instant type."""

    def _bounded(self: C, low: Any = None, high: Any = None, strict: bool = False) -> C:
        return self._register(threshold_factory(
            self.kind,
            self._adopt,
            (low, high),
            lambda lo, hi: bound_check(
                lo, hi, strict=strict, low_reason=Reason.TOO_EARLY, high_reason=Reason.TOO_LATE,
            ),
        ))

    def start_from(self: C, value: Any) -> C:
        """Not earlier than value."""
        return self._bounded(low=value)

    def end_to(self: C, value: Any) -> C:
        """Not later than value."""
        return self._bounded(high=value)

    def after(self: C, value: Any) -> C:
        return self._bounded(low=value, strict=True)

    def before(self: C, value: Any) -> C:
        return self._bounded(high=value, strict=True)

    def equal(self: C, value: Any) -> C:
        return self._bounded(low=value, high=value)

    def between(self: C, start: Any, end: Any) -> C:
        return self._bounded(low=start, high=end)


class TimestampFilterBuilder(ChronoChecks):
    kind = "timestamp"

    def _adopt(self, context: Any, raw: Any):
        return TIMESTAMP.adopt(raw)

    def _compile(self, context: Any, checks: tuple) -> CompiledFilter[int]:
        rule = StringToInteger(TIMESTAMP.minimum, TIMESTAMP.maximum)
        return CompiledFilter(
            kind=self.kind,
            coerce=partial(coerce_integer, TIMESTAMP, rule),
            not_type=TIMESTAMP.not_type,
            checks=checks,
            allow_values=tuple(self._allow),
        )


def timestamp() -> TimestampFilterBuilder:
    return TimestampFilterBuilder()
