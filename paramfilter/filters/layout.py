"""Date/time layout and zone options shared by time filters and time ranges."""
from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from paramfilter.coercion import CoercionError, StringToDateTime
from paramfilter.config import get_settings
from paramfilter.errors import Err, Ok, Result

L = TypeVar("L", bound="LayoutOptions")

FALLBACK_ZONE = "UTC"


def load_zone(key: str) -> tzinfo | None:
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def adopt_datetime(rule: StringToDateTime, value: Any) -> Result[datetime, CoercionError]:
    """Layout text or a datetime; naive datetimes are placed in the rule's zone."""
    if isinstance(value, str):
        return rule.coerce(value)
    if isinstance(value, datetime):
        return Ok(value if value.tzinfo is not None else value.replace(tzinfo=rule.zone))
    return Err(CoercionError(f"{value!r} is not a datetime"))


class LayoutOptions:
    """layout(), has_time() and location() for builders reading date/time text.

    Defaults come from FilterSettings when the builder is created; nothing
    global is consulted afterwards.
    """

    def _init_layout(self) -> None:
        settings = get_settings()
        self._date_layout = settings.DATE_LAYOUT
        self._datetime_layout = settings.DATETIME_LAYOUT
        self._layout = settings.DATE_LAYOUT
        self._zone_key = settings.TIME_ZONE
        self._zone: tzinfo | None = None

    def layout(self: L, layout: str) -> L:
        """strptime layout for values and thresholds."""
        self._layout = layout
        return self

    def has_time(self: L, enabled: bool = True) -> L:
        """Switch between the date layout and the date-and-time layout."""
        self._layout = self._datetime_layout if enabled else self._date_layout
        return self

    def location(self: L, zone: tzinfo | str) -> L:
        """Zone in which text without an offset is read."""
        if isinstance(zone, str):
            self._zone_key, self._zone = zone, None
        else:
            self._zone = zone
        return self

    def _resolve_zone(self) -> tzinfo | None:
        return self._zone if self._zone is not None else load_zone(self._zone_key)

    def _layout_problem(self) -> str | None:
        if self._resolve_zone() is None:
            return f"unknown time zone {self._zone_key!r}"
        return None

    def _datetime_rule(self) -> StringToDateTime:
        zone = self._resolve_zone() or ZoneInfo(FALLBACK_ZONE)
        return StringToDateTime(self._layout, zone)
