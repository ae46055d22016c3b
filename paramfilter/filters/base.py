"""Filter Builders and Compiled Filters

A builder collects configuration through chained calls (each returns the
same builder). build() freezes it into an immutable filter whose run() may
be called concurrently; run() never touches builder state.

Calling builder methods concurrently with build() is unsupported: finish
configuring, build once, share the result.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Generic, Protocol, TypeVar

from paramfilter.errors import (
    Err,
    FilterError,
    Ok,
    Reason,
    Result,
    internal_error,
    invalid_param,
)
from paramfilter.logging import filter_logger

T = TypeVar("T")
B = TypeVar("B", bound="FilterBuilder")

TRIM_CHARS = " \t\r\n"

# A check receives the parameter name and the coerced value.
Check = Callable[[str, T], FilterError | None]

log = filter_logger()


class Filter(Protocol):
    """Anything that can run a named parameter value."""

    def run(self, name: str, value: Any) -> Result[Any, FilterError]: ...


def run_checks(checks: tuple[Check[T], ...], name: str, value: T) -> Result[T, FilterError]:
    """Run checks in order; the first failure wins."""
    for check in checks:
        if (error := check(name, value)) is not None:
            return Err(error)
    return Ok(value)


def invalid_validator(kind: str, detail: str) -> Check[Any]:
    """Check standing in for a misconfigured validator.

    Reports InternalError:<name>:InvalidValidator on every run rather than
    raising while the rule set is being defined.
    """
    log.warning("invalid_validator", filter=kind, detail=detail)

    def check(name: str, value: Any) -> FilterError:
        return internal_error(name, Reason.INVALID_VALIDATOR)

    return check


@dataclass(frozen=True, slots=True)
class CompiledFilter(Generic[T]):
    """Immutable scalar filter produced by a builder."""
    kind: str
    coerce: Callable[[Any], Result[T, Any]]
    not_type: Reason
    checks: tuple[Check[T], ...] = ()
    allow_values: tuple[str, ...] = ()
    trim: bool = True
    # finish(source, value) shapes the output; source is the trimmed input.
    finish: Callable[[Any, T], Any] | None = None

    def run(self, name: str, value: Any) -> Result[Any, FilterError]:
        if value is None:
            return Ok(None)

        if isinstance(value, str):
            if self.trim:
                value = value.strip(TRIM_CHARS)
            if value in self.allow_values:
                return Ok(value)

        match self.coerce(value):
            case Ok(native):
                result = run_checks(self.checks, name, native)
            case Err(_):
                return Err(invalid_param(name, self.not_type))

        if self.finish is not None:
            return result.map(lambda native: self.finish(value, native))
        return result


class FilterBuilder(ABC, Generic[T]):
    """Fluent configuration shared by every filter builder.

    Validators are registered as factories and only turned into checks by
    build(), so options that affect parsing (layout, zone, base) apply to
    every validator no matter the order they were set in.
    """

    kind: ClassVar[str] = "filter"

    def __init__(self) -> None:
        self._allow: list[str] = []
        self._factories: list[Callable[[Any], Check[T]]] = []

    def allow(self: B, *values: str) -> B:
        """Return these raw strings verbatim, skipping coercion and validation."""
        self._allow.extend(values)
        return self

    def add_validator(self: B, check: Check[T]) -> B:
        """Register a custom check(name, value) -> FilterError | None."""
        self._factories.append(lambda _context: check)
        return self

    def _register(self: B, factory: Callable[[Any], Check[T]]) -> B:
        self._factories.append(factory)
        return self

    def _context(self) -> Any:
        """Build-time context handed to validator factories."""
        return None

    @abstractmethod
    def _compile(self, context: Any, checks: tuple[Check[T], ...]) -> Filter:
        """Turn the resolved context and checks into the immutable filter."""

    def build(self) -> Filter:
        """Freeze the configuration into an immutable filter."""
        context = self._context()
        checks = tuple(factory(context) for factory in self._factories)
        compiled = self._compile(context, checks)
        log.debug("filter_built", filter=self.kind, checks=len(checks), allow=len(self._allow))
        return compiled

    def run(self, name: str, value: Any) -> Result[Any, FilterError]:
        """Build a snapshot and run it. Prefer build() once for hot paths."""
        return self.build().run(name, value)


def bound_check(
    low: Any = None,
    high: Any = None,
    *,
    strict: bool = False,
    low_reason: Reason,
    high_reason: Reason,
    measure: Callable[[Any], Any] = lambda v: v,
) -> Check[Any]:
    """Compare measure(value) against optional lower/upper thresholds.

    strict turns the inclusive comparisons into exclusive ones.
    """

    def check(name: str, value: Any) -> FilterError | None:
        measured = measure(value)
        if low is not None and (measured < low or (strict and measured == low)):
            return invalid_param(name, low_reason)
        if high is not None and (measured > high or (strict and measured == high)):
            return invalid_param(name, high_reason)
        return None

    return check


def membership_check(allowed: Any, reason: Reason = Reason.NOT_IN_SET) -> Check[Any]:
    values = tuple(allowed)

    def check(name: str, value: Any) -> FilterError | None:
        return None if value in values else invalid_param(name, reason)

    return check


def threshold_factory(
    kind: str,
    adopt: Callable[[Any, Any], Result[Any, Any]],
    values: tuple[Any, ...],
    make: Callable[..., Check[Any]],
) -> Callable[[Any], Check[Any]]:
    """Factory that adopts raw thresholds in the build context, then makes a check.

    adopt(context, raw) returns a Result; None thresholds pass through.
    A threshold that cannot be adopted yields an invalid_validator check.
    """

    def factory(context: Any) -> Check[Any]:
        resolved = []
        for raw in values:
            if raw is None:
                resolved.append(None)
                continue
            match adopt(context, raw):
                case Ok(value):
                    resolved.append(value)
                case Err(e):
                    return invalid_validator(kind, f"threshold {raw!r}: {e}")
        return make(*resolved)

    return factory
