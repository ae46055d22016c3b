"""Date/Time Filter

Values and thresholds are layout text (or datetimes). Text without an
offset is read in the builder's zone, which defaults to
FilterSettings.TIME_ZONE.
"""
from __future__ import annotations

from datetime import datetime
from functools import partial
from typing import Any

from paramfilter.coercion import StringToDateTime
from paramfilter.errors import Reason

from .base import CompiledFilter, invalid_validator
from .layout import LayoutOptions, adopt_datetime
from .timestamp import ChronoChecks


class TimeFilterBuilder(LayoutOptions, ChronoChecks):
    kind = "time"

    def __init__(self) -> None:
        super().__init__()
        self._init_layout()

    def _context(self) -> StringToDateTime:
        return self._datetime_rule()

    def _adopt(self, context: StringToDateTime, raw: Any):
        return adopt_datetime(context, raw)

    def _compile(self, context: StringToDateTime, checks: tuple) -> CompiledFilter[datetime]:
        if problem := self._layout_problem():
            checks = (invalid_validator(self.kind, problem), *checks)
        return CompiledFilter(
            kind=self.kind,
            coerce=partial(adopt_datetime, context),
            not_type=Reason.NOT_TIME,
            checks=checks,
            allow_values=tuple(self._allow),
        )


def time() -> TimeFilterBuilder:
    return TimeFilterBuilder()
