"""Filter Error Handling

Filters never raise for bad input. Each run returns a Result:

- Ok(value): the coerced (or allow-listed) value
- Err(FilterError): kind + fields, e.g. InvalidParam:window:LeftTooSmall

Usage:
    from paramfilter.errors import Ok, Err, ErrorKind

    match flt.run("window", raw):
        case Ok(window):
            ...
        case Err(error):
            log.info("param_rejected", error=str(error))
"""
from .types import (
    ErrorKind,
    Reason,
    FilterError,
    FilterErrorException,
    Result,
    Ok,
    Err,
)

from .builders import (
    new_error,
    invalid_param,
    missing_param,
    internal_error,
)

__all__ = [
    # Core types
    "ErrorKind",
    "Reason",
    "FilterError",
    "FilterErrorException",
    "Result",
    "Ok",
    "Err",
    # Builders
    "new_error",
    "invalid_param",
    "missing_param",
    "internal_error",
]
