"""Range Filters

Interval parameters such as "[1,10)" or "(2024-01-01,2024-02-01]" parsed
into a typed Range and checked endpoint by endpoint.

Usage:
    from paramfilter.ranges import int64_range, time_range

    window = (
        time_range()
        .has_time()
        .left_start_from("2024-01-01 00:00:00")
        .max_distance("7d")
        .build()
    )
    result = window.run("window", "[2024-03-01 00:00:00,2024-03-02 00:00:00)")
"""
from .domains import (
    INT,
    INT32,
    INT64,
    TIMESTAMP,
    UINT,
    UINT32,
    UINT64,
    DateTimeDomain,
    IntegerDomain,
    OrdinalDomain,
)
from .filter import (
    ChronoRangeBuilder,
    NumericRangeBuilder,
    RangeFilter,
    RangeFilterBuilder,
    TimeRangeBuilder,
    TimestampRangeBuilder,
)
from .parser import RangeSyntaxError, format_range, parse_range, split_range
from .value import Range


def int32_range() -> NumericRangeBuilder:
    return NumericRangeBuilder(INT32)


def uint32_range() -> NumericRangeBuilder:
    return NumericRangeBuilder(UINT32)


def int64_range() -> NumericRangeBuilder:
    return NumericRangeBuilder(INT64)


def uint64_range() -> NumericRangeBuilder:
    return NumericRangeBuilder(UINT64)


def int_range() -> NumericRangeBuilder:
    """Platform int range (64-bit)."""
    return NumericRangeBuilder(INT)


def uint_range() -> NumericRangeBuilder:
    """Platform uint range (64-bit)."""
    return NumericRangeBuilder(UINT)


def timestamp_range() -> TimestampRangeBuilder:
    """Unix timestamp range, endpoints in uint32 seconds."""
    return TimestampRangeBuilder()


def time_range() -> TimeRangeBuilder:
    """Date/time range; layout and zone default from FilterSettings."""
    return TimeRangeBuilder()


__all__ = [
    # Values
    "Range",
    "RangeFilter",
    # Builders
    "RangeFilterBuilder",
    "NumericRangeBuilder",
    "ChronoRangeBuilder",
    "TimestampRangeBuilder",
    "TimeRangeBuilder",
    # Bindings
    "int32_range",
    "uint32_range",
    "int64_range",
    "uint64_range",
    "int_range",
    "uint_range",
    "timestamp_range",
    "time_range",
    # Notation
    "RangeSyntaxError",
    "split_range",
    "parse_range",
    "format_range",
    # Domains
    "OrdinalDomain",
    "IntegerDomain",
    "DateTimeDomain",
    "INT32",
    "UINT32",
    "INT64",
    "UINT64",
    "INT",
    "UINT",
    "TIMESTAMP",
]
