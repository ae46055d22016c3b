"""Scalar Filters

Builders for single values. Each builder is fluent; build() returns an
immutable filter whose run(name, value) returns Ok(value) or Err(FilterError).

Usage:
    from paramfilter.filters import int32, string

    age = int32().between(0, 150).build()
    nick = string().trim().between(2, 32).match(r"^[a-z0-9_]+$").build()

    match age.run("age", "42"):
        case Ok(value):
            ...
        case Err(error):
            ...
"""
from .base import (
    TRIM_CHARS,
    Check,
    CompiledFilter,
    Filter,
    FilterBuilder,
    run_checks,
)
from .email import EmailFilterBuilder, email
from .float import FloatFilterBuilder, float32, float64
from .integer import IntegerFilterBuilder, int32, int64, int_, uint, uint32, uint64
from .ip import CIDRAddr, CIDRFilterBuilder, IPFilterBuilder, cidr, ip
from .json import JsonFilterBuilder, json
from .presence import (
    DefaultFilter,
    EmptyToNilFilter,
    RequiredFilter,
    default,
    empty_to_nil,
    required,
)
from .string import StringFilterBuilder, string
from .time import TimeFilterBuilder, time
from .timestamp import TimestampFilterBuilder, timestamp

__all__ = [
    # Contract
    "TRIM_CHARS",
    "Check",
    "Filter",
    "FilterBuilder",
    "CompiledFilter",
    "run_checks",
    # Integers
    "IntegerFilterBuilder",
    "int32",
    "uint32",
    "int64",
    "uint64",
    "int_",
    "uint",
    # Floats
    "FloatFilterBuilder",
    "float32",
    "float64",
    # Text
    "StringFilterBuilder",
    "string",
    "EmailFilterBuilder",
    "email",
    "JsonFilterBuilder",
    "json",
    # Network
    "IPFilterBuilder",
    "ip",
    "CIDRFilterBuilder",
    "CIDRAddr",
    "cidr",
    # Time
    "TimestampFilterBuilder",
    "timestamp",
    "TimeFilterBuilder",
    "time",
    # Presence
    "RequiredFilter",
    "DefaultFilter",
    "EmptyToNilFilter",
    "required",
    "default",
    "empty_to_nil",
]
