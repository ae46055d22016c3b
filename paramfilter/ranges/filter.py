"""Range Filters

One generic filter drives every range type; the domain supplies extrema,
step unit, distance measure and endpoint text format.

Open sides are handled by moving thresholds rather than endpoints: a
left-open range compares its left endpoint against thresholds stepped down
one unit (saturating at the domain minimum), a right-open range against
thresholds stepped up one unit (saturating at the maximum). Adjusted values
are local to each run; configured thresholds never change.

Usage:
    from paramfilter.ranges import int32_range

    page = int32_range().left_min(0).right_max(100).max_distance(50).build()
    match page.run("page", "[0,20)"):
        case Ok(value):
            ...
        case Err(error):
            print(error)   # InvalidParam:page:TooFar
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

from paramfilter.errors import Err, FilterError, Ok, Reason, Result, invalid_param
from paramfilter.filters.base import (
    TRIM_CHARS,
    Check,
    FilterBuilder,
    invalid_validator,
    run_checks,
)
from paramfilter.filters.layout import LayoutOptions
from paramfilter.logging import range_logger

from .domains import TIMESTAMP, DateTimeDomain, IntegerDomain, OrdinalDomain
from .parser import parse_range
from .value import Range

T = TypeVar("T")
B = TypeVar("B", bound="RangeFilterBuilder")

LEFT, RIGHT = "left", "right"

log = range_logger()


def _measure(domain: OrdinalDomain[Any, Any], value: Range[Any]) -> Any | None:
    """Effective width of the range, or None when it is not a valid range.

    Each open side removes one unit; a side cannot be opened on an empty
    width. The left side is examined first.
    """
    width = domain.distance(value.left, value.right)
    if width < domain.zero:
        return None
    for closed in (value.left_closed, value.right_closed):
        if closed:
            continue
        if width <= domain.zero:
            return None
        width -= domain.unit
    return width


def _endpoint_check(
    domain: OrdinalDomain[Any, Any],
    side: str,
    low: Any,
    high: Any,
    strict: bool,
    reasons: tuple[Reason, Reason],
) -> Check[Range[Any]]:
    too_small, too_large = reasons

    def check(name: str, value: Range[Any]) -> FilterError | None:
        if side == LEFT:
            endpoint, closed, adjust = value.left, value.left_closed, domain.step_down
        else:
            endpoint, closed, adjust = value.right, value.right_closed, domain.step_up

        lo, hi = low, high
        if not closed:
            lo = adjust(lo) if lo is not None else None
            hi = adjust(hi) if hi is not None else None

        if lo is not None and (endpoint < lo or (strict and endpoint == lo)):
            return invalid_param(name, too_small)
        if hi is not None and (endpoint > hi or (strict and endpoint == hi)):
            return invalid_param(name, too_large)
        return None

    return check


def _distance_check(domain: OrdinalDomain[Any, Any], threshold: Any, farthest: bool) -> Check[Range[Any]]:
    def check(name: str, value: Range[Any]) -> FilterError | None:
        width = _measure(domain, value)
        if width is None:
            return invalid_param(name, Reason.WRONG_RANGE)
        if farthest and width > threshold:
            return invalid_param(name, Reason.TOO_FAR)
        if not farthest and width < threshold:
            return invalid_param(name, Reason.TOO_NEAR)
        return None

    return check


@dataclass(frozen=True, slots=True)
class RangeFilter(Generic[T]):
    """Immutable range filter.

    Empty endpoints take default_left/default_right; None means the
    domain's own default, evaluated per run (so "now" stays current).
    """
    domain: OrdinalDomain[T, Any]
    default_left: T | None = None
    default_right: T | None = None
    allow_values: tuple[str, ...] = ()
    checks: tuple[Check[Range[T]], ...] = ()

    def _coerce(self, value: Any) -> Result[Range[T], Any]:
        if isinstance(value, str):
            return parse_range(value, self.domain, self.default_left, self.default_right)
        if isinstance(value, Range):
            left, right = self.domain.adopt(value.left), self.domain.adopt(value.right)
            if left.is_err():
                return left
            if right.is_err():
                return right
            return Ok(Range(left.unwrap(), right.unwrap(), value.left_closed, value.right_closed))
        return Err(TypeError(f"{type(value).__name__} is not a range"))

    def run(self, name: str, value: Any) -> Result[Range[T] | str | None, FilterError]:
        if value is None:
            return Ok(None)

        if isinstance(value, str):
            value = value.strip(TRIM_CHARS)
            if value in self.allow_values:
                return Ok(value)

        match self._coerce(value):
            case Ok(interval):
                return run_checks(self.checks, name, interval)
            case Err(_):
                return Err(invalid_param(name, self.domain.not_range))


class RangeFilterBuilder(FilterBuilder[Range[T]]):
    """Options shared by every range builder."""

    kind: ClassVar[str] = "range"
    reasons: ClassVar[dict[str, tuple[Reason, Reason]]] = {
        LEFT: (Reason.LEFT_TOO_SMALL, Reason.LEFT_TOO_LARGE),
        RIGHT: (Reason.RIGHT_TOO_SMALL, Reason.RIGHT_TOO_LARGE),
    }

    def __init__(self, domain: OrdinalDomain[T, Any]) -> None:
        super().__init__()
        self._domain = domain
        self._default_left: Any = None
        self._default_right: Any = None

    def left_default(self: B, value: Any) -> B:
        """Endpoint used when the left side of the text is empty."""
        self._default_left = value
        return self

    def right_default(self: B, value: Any) -> B:
        """Endpoint used when the right side of the text is empty."""
        self._default_right = value
        return self

    def _bound(self: B, side: str, low: Any = None, high: Any = None, *, strict: bool = False) -> B:
        reasons = self.reasons[side]

        def factory(domain: OrdinalDomain[Any, Any]) -> Check[Range[Any]]:
            resolved = []
            for raw in (low, high):
                if raw is None:
                    resolved.append(None)
                    continue
                adopted = domain.adopt(raw)
                if adopted.is_err():
                    return invalid_validator(domain.name, f"{side} threshold: {adopted.unwrap_err()}")
                resolved.append(adopted.unwrap())
            return _endpoint_check(domain, side, resolved[0], resolved[1], strict, reasons)

        return self._register(factory)

    def _distance(self: B, threshold: Any, farthest: bool) -> B:
        def factory(domain: OrdinalDomain[Any, Any]) -> Check[Range[Any]]:
            match domain.span(threshold):
                case Ok(span):
                    return _distance_check(domain, span, farthest)
                case Err(e):
                    return invalid_validator(domain.name, f"distance threshold: {e}")

        return self._register(factory)

    def min_distance(self: B, value: Any) -> B:
        """Reject ranges whose effective width is below value (TooNear)."""
        return self._distance(value, farthest=False)

    def max_distance(self: B, value: Any) -> B:
        """Reject ranges whose effective width exceeds value (TooFar)."""
        return self._distance(value, farthest=True)

    def _misconfigured(self) -> str | None:
        return None

    def _context(self) -> OrdinalDomain[T, Any]:
        return self._domain

    def _compile(self, context: OrdinalDomain[T, Any], checks: tuple[Check[Range[T]], ...]) -> RangeFilter[T]:
        defaults = []
        problems = [p for p in (self._misconfigured(),) if p]
        for side, raw in ((LEFT, self._default_left), (RIGHT, self._default_right)):
            if raw is None:
                defaults.append(None)
                continue
            match context.adopt(raw):
                case Ok(adopted):
                    defaults.append(adopted)
                case Err(e):
                    defaults.append(None)
                    problems.append(f"{side} default: {e}")

        if problems:
            checks = (invalid_validator(context.name, "; ".join(problems)), *checks)

        log.debug("range_filter_built", domain=context.name, checks=len(checks))
        return RangeFilter(
            domain=context,
            default_left=defaults[0],
            default_right=defaults[1],
            allow_values=tuple(self._allow),
            checks=checks,
        )


class NumericRangeBuilder(RangeFilterBuilder[int]):
    """Integer ranges: bounds on each endpoint by magnitude."""

    def __init__(self, domain: IntegerDomain) -> None:
        super().__init__(domain)

    def base(self, base: int) -> NumericRangeBuilder:
        """Endpoint text base: 2..36, or 0 to infer from the literal prefix."""
        self._domain = replace(self._domain, base=base)
        return self

    def _misconfigured(self) -> str | None:
        base = self._domain.base
        if base != 0 and not 2 <= base <= 36:
            return f"invalid base {base}"
        return None

    def _context(self) -> IntegerDomain:
        if self._misconfigured():
            return replace(self._domain, base=10)
        return self._domain

    def left_min(self, value: int) -> NumericRangeBuilder:
        return self._bound(LEFT, low=value)

    def left_max(self, value: int) -> NumericRangeBuilder:
        return self._bound(LEFT, high=value)

    def left_larger_than(self, value: int) -> NumericRangeBuilder:
        return self._bound(LEFT, low=value, strict=True)

    def left_smaller_than(self, value: int) -> NumericRangeBuilder:
        return self._bound(LEFT, high=value, strict=True)

    def left_equal(self, value: int) -> NumericRangeBuilder:
        return self._bound(LEFT, low=value, high=value)

    def left_between(self, minimum: int, maximum: int) -> NumericRangeBuilder:
        return self._bound(LEFT, low=minimum, high=maximum)

    def right_min(self, value: int) -> NumericRangeBuilder:
        return self._bound(RIGHT, low=value)

    def right_max(self, value: int) -> NumericRangeBuilder:
        return self._bound(RIGHT, high=value)

    def right_larger_than(self, value: int) -> NumericRangeBuilder:
        return self._bound(RIGHT, low=value, strict=True)

    def right_smaller_than(self, value: int) -> NumericRangeBuilder:
        return self._bound(RIGHT, high=value, strict=True)

    def right_equal(self, value: int) -> NumericRangeBuilder:
        return self._bound(RIGHT, low=value, high=value)

    def right_between(self, minimum: int, maximum: int) -> NumericRangeBuilder:
        return self._bound(RIGHT, low=minimum, high=maximum)


class ChronoRangeBuilder(RangeFilterBuilder[T]):
    """Ranges of instants: bounds on each endpoint by earliness."""

    reasons: ClassVar[dict[str, tuple[Reason, Reason]]] = {
        LEFT: (Reason.LEFT_TOO_EARLY, Reason.LEFT_TOO_LATE),
        RIGHT: (Reason.RIGHT_TOO_EARLY, Reason.RIGHT_TOO_LATE),
    }

    def left_start_from(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(LEFT, low=value)

    def left_end_to(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(LEFT, high=value)

    def left_after(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(LEFT, low=value, strict=True)

    def left_before(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(LEFT, high=value, strict=True)

    def left_equal(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(LEFT, low=value, high=value)

    def left_between(self, start: Any, end: Any) -> ChronoRangeBuilder[T]:
        return self._bound(LEFT, low=start, high=end)

    def right_start_from(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(RIGHT, low=value)

    def right_end_to(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(RIGHT, high=value)

    def right_after(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(RIGHT, low=value, strict=True)

    def right_before(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(RIGHT, high=value, strict=True)

    def right_equal(self, value: Any) -> ChronoRangeBuilder[T]:
        return self._bound(RIGHT, low=value, high=value)

    def right_between(self, start: Any, end: Any) -> ChronoRangeBuilder[T]:
        return self._bound(RIGHT, low=start, high=end)


class TimestampRangeBuilder(ChronoRangeBuilder[int]):
    """Unix-second ranges; distances are whole seconds."""

    def __init__(self) -> None:
        super().__init__(TIMESTAMP)


class TimeRangeBuilder(LayoutOptions, ChronoRangeBuilder[datetime]):
    """Date/time ranges read with a strptime layout in an explicit zone.

    Thresholds and defaults may be given as layout text or datetimes;
    distances as timedelta, seconds, or duration text ("90s", "PT1H").
    """

    def __init__(self) -> None:
        self._init_layout()
        rule = self._datetime_rule()
        super().__init__(DateTimeDomain(rule.layout, rule.zone))

    def _misconfigured(self) -> str | None:
        return self._layout_problem()

    def _context(self) -> DateTimeDomain:
        rule = self._datetime_rule()
        return DateTimeDomain(rule.layout, rule.zone)
