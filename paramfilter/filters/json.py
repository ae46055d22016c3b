"""JSON Filter

Decodes a JSON document, optionally straight into a pydantic model (or any
type a pydantic TypeAdapter understands).
"""
from __future__ import annotations

import json as jsonlib
from typing import Any

from pydantic import TypeAdapter, ValidationError

from paramfilter.coercion import CoercionError
from paramfilter.errors import Err, Ok, Reason, Result

from .base import CompiledFilter, FilterBuilder


def decoder(adapter: TypeAdapter | None):
    def decode(value: Any) -> Result[Any, CoercionError]:
        if not isinstance(value, str):
            return Err(CoercionError(f"{type(value).__name__} is not JSON text"))
        try:
            if adapter is not None:
                return Ok(adapter.validate_json(value))
            return Ok(jsonlib.loads(value))
        except (ValueError, ValidationError) as e:
            return Err(CoercionError(str(e)))

    return decode


class JsonFilterBuilder(FilterBuilder[Any]):
    kind = "json"

    def __init__(self) -> None:
        super().__init__()
        self._output: Any = None
        self._to_string = False

    def output(self, model: Any) -> JsonFilterBuilder:
        """Decode into model (a pydantic model or any TypeAdapter type)."""
        self._output = model
        return self

    def to_string(self) -> JsonFilterBuilder:
        """Return the (trimmed) JSON text once it has decoded and validated."""
        self._to_string = True
        return self

    def _compile(self, context: Any, checks: tuple) -> CompiledFilter[Any]:
        adapter = TypeAdapter(self._output) if self._output is not None else None
        return CompiledFilter(
            kind=self.kind,
            coerce=decoder(adapter),
            not_type=Reason.NOT_JSON,
            checks=checks,
            allow_values=tuple(self._allow),
            finish=(lambda source, _decoded: source) if self._to_string else None,
        )


def json() -> JsonFilterBuilder:
    return JsonFilterBuilder()
