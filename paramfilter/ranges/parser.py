"""Interval Notation

    [left,right]   closed on both sides
    (left,right)   open on both sides
    [left,right)   half-open (either side may be open)
    left,right     brackets omitted as a pair: closed-closed
    [,right]       an empty endpoint takes the configured default
    ""             both endpoints defaulted, closed-closed

Endpoints are separated by exactly one comma and trimmed before parsing.
"""
from __future__ import annotations

import re
from typing import TypeVar

from paramfilter.errors import Err, Ok, Result

from .domains import OrdinalDomain
from .value import Range

T = TypeVar("T")

SEPARATOR = ","
_BRACKETED = re.compile(r"(?P<open>[\[(])(?P<body>.*)(?P<close>[\])])", re.DOTALL)
_BRACKETS = frozenset("[]()")


class RangeSyntaxError(ValueError):
    """Text is not valid interval notation for the domain."""


def split_range(text: str) -> tuple[bool, str, str, bool]:
    """Split notation into (left_closed, left_text, right_text, right_closed).

    Raises RangeSyntaxError on malformed brackets or separators.
    """
    text = text.strip()
    if not text:
        return True, "", "", True

    if match := _BRACKETED.fullmatch(text):
        left_closed = match["open"] == "["
        right_closed = match["close"] == "]"
        body = match["body"]
    else:
        left_closed = right_closed = True
        body = text

    if _BRACKETS.intersection(body):
        raise RangeSyntaxError(f"Unbalanced brackets in {text!r}")
    if body.count(SEPARATOR) != 1:
        raise RangeSyntaxError(f"Expected exactly one {SEPARATOR!r} in {text!r}")

    left_text, right_text = (part.strip() for part in body.split(SEPARATOR))
    return left_closed, left_text, right_text, right_closed


def parse_range(
    text: str,
    domain: OrdinalDomain[T, object],
    default_left: T | None = None,
    default_right: T | None = None,
) -> Result[Range[T], RangeSyntaxError]:
    """Parse interval notation into a Range of the domain.

    Missing endpoints take default_left/default_right, or the domain's own
    defaults when those are None.
    """
    try:
        left_closed, left_text, right_text, right_closed = split_range(text)
    except RangeSyntaxError as e:
        return Err(e)

    endpoints = []
    for part, fallback, resolve in (
        (left_text, default_left, domain.default_left),
        (right_text, default_right, domain.default_right),
    ):
        if not part:
            endpoints.append(fallback if fallback is not None else resolve())
            continue
        parsed = domain.parse(part)
        if parsed.is_err():
            return Err(RangeSyntaxError(str(parsed.unwrap_err())))
        endpoints.append(parsed.unwrap())

    left, right = endpoints
    return Ok(Range(left, right, left_closed, right_closed))


def format_range(value: Range[T], domain: OrdinalDomain[T, object]) -> str:
    """Render a Range back to bracket notation."""
    return (
        f"{value.open_bracket}{domain.format(value.left)}"
        f"{SEPARATOR}{domain.format(value.right)}{value.close_bracket}"
    )
