"""Filter Error Builders

Ergonomic constructors for the errors filters emit. Reason codes may be
passed as Reason members or plain strings (custom validators).
"""
from .types import ErrorKind, FilterError, Reason


def _code(reason: Reason | str) -> str:
    return reason.value if isinstance(reason, Reason) else str(reason)


def new_error(kind: ErrorKind, *fields: Reason | str) -> FilterError:
    """Create an error of the given kind with ordered context fields."""
    return FilterError(kind=kind, fields=tuple(_code(f) for f in fields))


def invalid_param(param: str, reason: Reason | str) -> FilterError:
    return new_error(ErrorKind.INVALID_PARAM, param, reason)


def missing_param(param: str) -> FilterError:
    return new_error(ErrorKind.MISSING_PARAM, param)


def internal_error(param: str, reason: Reason | str = Reason.INVALID_VALIDATOR) -> FilterError:
    """Misconfigured validator, reported instead of crashing."""
    return new_error(ErrorKind.INTERNAL_ERROR, param, reason)
