"""Email Filter

Addresses are lower-cased by default. Only ordinary domain suffixes are
accepted, with top-level labels of 2 to 10 letters.
"""
from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any

from paramfilter.coercion import CoercionError
from paramfilter.errors import Err, FilterError, Ok, Reason, Result, invalid_param

from .base import CompiledFilter
from .string import Case, LengthChecks

EMAIL_PATTERN = re.compile(
    r"[a-z0-9._-]+@(?:(?:[a-z0-9][a-z0-9\-]{0,62}[a-z0-9]|[a-z0-9])\.)+[a-z]{2,10}",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class EmailShape:
    case: Case

    def coerce(self, value: Any) -> Result[str, CoercionError]:
        if not isinstance(value, str):
            return Err(CoercionError(f"{type(value).__name__} is not a string"))
        value = self.case.apply(value)
        if EMAIL_PATTERN.fullmatch(value) is None:
            return Err(CoercionError(f"{value!r} is not an email address"))
        return Ok(value)


class EmailFilterBuilder(LengthChecks):
    kind = "email"

    def __init__(self) -> None:
        super().__init__()
        self._case = Case.LOWER

    def domain(self, domain: str) -> EmailFilterBuilder:
        """Address must belong to exactly this domain."""
        suffix = "@" + domain

        def check(name: str, value: str) -> FilterError | None:
            return None if value.endswith(suffix) else invalid_param(name, Reason.WRONG_FORMAT)

        return self.add_validator(check)

    def _compile(self, context: Any, checks: tuple) -> CompiledFilter[str]:
        return CompiledFilter(
            kind=self.kind,
            coerce=EmailShape(self._case).coerce,
            not_type=Reason.NOT_EMAIL,
            checks=checks,
            allow_values=tuple(self._allow),
        )


def email() -> EmailFilterBuilder:
    return EmailFilterBuilder()
