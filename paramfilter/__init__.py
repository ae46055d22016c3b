"""paramfilter: typed parameter filters

Coerce externally supplied values (usually request strings) into native
types, check them against declared constraints, and report failures as
structured, localizable errors instead of exceptions.

Usage:
    from paramfilter import Ok, Err, int64_range, string

    window = int64_range().left_min(0).max_distance(1000).build()
    match window.run("window", "[10,20)"):
        case Ok(value):
            ...
        case Err(error):
            str(error)   # e.g. "InvalidParam:window:LeftTooSmall"
"""
from .annotated import Filtered
from .config import FilterSettings, get_settings
from .errors import (
    Err,
    ErrorKind,
    FilterError,
    FilterErrorException,
    Ok,
    Reason,
    Result,
    internal_error,
    invalid_param,
    missing_param,
    new_error,
)
from .filters import (
    CIDRAddr,
    cidr,
    default,
    email,
    empty_to_nil,
    float32,
    float64,
    int32,
    int64,
    int_,
    ip,
    json,
    required,
    string,
    time,
    timestamp,
    uint,
    uint32,
    uint64,
)
from .logging import configure_from_settings, configure_logging, get_logger
from .ranges import (
    Range,
    RangeFilter,
    format_range,
    int32_range,
    int64_range,
    int_range,
    parse_range,
    time_range,
    timestamp_range,
    uint32_range,
    uint64_range,
    uint_range,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ErrorKind",
    "Reason",
    "FilterError",
    "FilterErrorException",
    "Result",
    "Ok",
    "Err",
    "new_error",
    "invalid_param",
    "missing_param",
    "internal_error",
    # Ranges
    "Range",
    "RangeFilter",
    "parse_range",
    "format_range",
    "int32_range",
    "uint32_range",
    "int64_range",
    "uint64_range",
    "int_range",
    "uint_range",
    "timestamp_range",
    "time_range",
    # Scalars
    "int32",
    "uint32",
    "int64",
    "uint64",
    "int_",
    "uint",
    "float32",
    "float64",
    "string",
    "email",
    "ip",
    "cidr",
    "CIDRAddr",
    "json",
    "timestamp",
    "time",
    "required",
    "default",
    "empty_to_nil",
    # Integration
    "Filtered",
    # Ambient
    "FilterSettings",
    "get_settings",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
