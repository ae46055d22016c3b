"""Filter Error and Result Types

Every filter returns a Result: Ok(value) on success, Err(FilterError) on
failure. Nothing is raised for bad input; callers pattern-match instead.

The numeric values of ErrorKind are shared with the API error-code contract
of the surrounding service and must never be renumbered.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Generic, Iterator, NoReturn, TypeVar, Union, final

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


class ErrorKind(IntEnum):
    """Application error categories.

    Values stay in sync with the API error codes (api.Error*).
    """
    OBJECT_NOT_EXIST = 0
    OBJECT_DUPLICATED = 1
    NO_OBJECT_UPDATED = 2
    NO_OBJECT_DELETED = 3
    MISSING_PARAM = 4
    INVALID_PARAM = 5
    QUOTA_EXCEED = 6
    PERMISSION_DENIED = 7
    OPERATION_FAILED = 8
    INTERNAL_ERROR = 9

    @property
    def label(self) -> str:
        """Canonical label, prepended when an error is rendered."""
        return _KIND_LABELS[self]


_KIND_LABELS: dict[ErrorKind, str] = {
    ErrorKind.OBJECT_NOT_EXIST: "ObjectNotExist",
    ErrorKind.OBJECT_DUPLICATED: "ObjectDuplicated",
    ErrorKind.NO_OBJECT_UPDATED: "NoObjectUpdated",
    ErrorKind.NO_OBJECT_DELETED: "NoObjectDeleted",
    ErrorKind.MISSING_PARAM: "MissingParam",
    ErrorKind.INVALID_PARAM: "InvalidParam",
    ErrorKind.QUOTA_EXCEED: "QuotaExceed",
    ErrorKind.PERMISSION_DENIED: "PermissionDenied",
    ErrorKind.OPERATION_FAILED: "OperationFailed",
    ErrorKind.INTERNAL_ERROR: "InternalError",
}


class Reason(str, Enum):
    """Reason codes emitted by filters.

    Opaque identifiers; the HTTP layer resolves them to localized text.
    """
    # Internal
    INVALID_VALIDATOR = "InvalidValidator"

    # Common
    NOT_IN_SET = "NotInSet"

    # Integer
    NOT_INT = "NotInt"
    NOT_INT32 = "NotInt32"
    NOT_INT64 = "NotInt64"
    NOT_UINT = "NotUint"
    NOT_UINT32 = "NotUint32"
    NOT_UINT64 = "NotUint64"
    TOO_SMALL = "TooSmall"
    TOO_LARGE = "TooLarge"

    # Float
    NOT_FLOAT32 = "NotFloat32"
    NOT_FLOAT64 = "NotFloat64"
    DECIMAL_PLACE_NOT_MATCH = "DecimalPlaceNotMatch"

    # String
    NOT_STRING = "NotString"
    TOO_SHORT = "TooShort"
    TOO_LONG = "TooLong"
    WRONG_FORMAT = "WrongFormat"
    NOT_NUMERIC = "NotNumeric"
    NOT_DIGIT = "NotDigit"
    NOT_ALPHA = "NotAlpha"
    NOT_ALPHA_NUMERIC = "NotAlphaNumeric"

    # Email
    NOT_EMAIL = "NotEmail"

    # IP / CIDR
    NOT_CIDR = "NotCIDR"
    NOT_IP = "NotIP"
    NOT_IPV4 = "NotIPv4"
    NOT_IPV6 = "NotIPv6"

    # JSON
    NOT_JSON = "NotJson"

    # Timestamp / Time
    NOT_TIMESTAMP = "NotTimestamp"
    NOT_TIME = "NotTime"
    TOO_EARLY = "TooEarly"
    TOO_LATE = "TooLate"

    # Range distance
    TOO_NEAR = "TooNear"
    TOO_FAR = "TooFar"
    WRONG_RANGE = "WrongRange"

    # Integer range
    NOT_INT_RANGE = "NotIntRange"
    NOT_INT32_RANGE = "NotInt32Range"
    NOT_INT64_RANGE = "NotInt64Range"
    NOT_UINT_RANGE = "NotUintRange"
    NOT_UINT32_RANGE = "NotUint32Range"
    NOT_UINT64_RANGE = "NotUint64Range"
    LEFT_TOO_SMALL = "LeftTooSmall"
    LEFT_TOO_LARGE = "LeftTooLarge"
    RIGHT_TOO_SMALL = "RightTooSmall"
    RIGHT_TOO_LARGE = "RightTooLarge"

    # Timestamp / Time range
    NOT_TIMESTAMP_RANGE = "NotTimestampRange"
    NOT_TIME_RANGE = "NotTimeRange"
    LEFT_TOO_EARLY = "LeftTooEarly"
    LEFT_TOO_LATE = "LeftTooLate"
    RIGHT_TOO_EARLY = "RightTooEarly"
    RIGHT_TOO_LATE = "RightTooLate"


@dataclass(frozen=True, slots=True)
class FilterError:
    """A filter failure: category plus ordered context fields.

    The first field is conventionally the parameter name, the remainder
    reason codes.
    """
    kind: ErrorKind
    fields: tuple[str, ...] = ()

    @property
    def param(self) -> str | None:
        return self.fields[0] if self.fields else None

    @property
    def reason(self) -> str | None:
        """Last reason code, if any follows the parameter name."""
        return self.fields[-1] if len(self.fields) > 1 else None

    def to_dict(self) -> dict:
        """Serialize error for API responses."""
        return {
            "error": {
                "kind": self.kind.label,
                "kind_num": self.kind.value,
                "param": self.param,
                "reason": self.reason,
                "fields": list(self.fields),
            }
        }

    def __str__(self) -> str:
        return ":".join((self.kind.label, *self.fields))


class FilterErrorException(Exception):
    """Exception wrapper for FilterError.

    Use this where a Result cannot be returned (e.g. inside pydantic validators).
    """

    def __init__(self, error: FilterError):
        self.error = error
        super().__init__(str(error))


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Transform the success value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """No-op for Ok variant."""
        return self  # type: ignore

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain operations that may fail."""
        return f(self.value)

    def match(self, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        return ok(self.value)

    def __iter__(self) -> Iterator[T]:
        yield self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        if isinstance(self.error, FilterError):
            raise FilterErrorException(self.error)
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """No-op for Err variant."""
        return self  # type: ignore

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Transform the error."""
        return Err(f(self.error))

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """No-op for Err variant."""
        return self  # type: ignore

    def match(self, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        return err(self.error)

    def __iter__(self) -> Iterator:
        return iter([])


Result = Union[Ok[T], Err[E]]
