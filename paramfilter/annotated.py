"""Pydantic Integration

Run any filter (or chain of filters) on a pydantic v2 model field. The field
name becomes the parameter name, and a FilterError surfaces as a pydantic
ValidationError carrying its rendered text.

Usage:
    from typing import Annotated, Any
    from pydantic import BaseModel
    from paramfilter import Filtered, int32, int32_range, required

    class Query(BaseModel):
        page: Annotated[Any, Filtered(required(), int32().min(1))]
        window: Annotated[Any, Filtered(int32_range().max_distance(100))] = None

    Query(page="2", window="[0,50)")
    Query(page=None)   # ValidationError: MissingParam:page
"""
from __future__ import annotations

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .errors import Err, Ok


class Filtered:
    """Annotated marker running filters in order before pydantic's own validation.

    Builders are built once here; the first failing filter stops the chain.
    """
    __slots__ = ("filters", "name")

    def __init__(self, *filters: Any, name: str | None = None):
        if not filters:
            raise ValueError("Filtered needs at least one filter")
        self.filters = tuple(f.build() if hasattr(f, "build") else f for f in filters)
        self.name = name

    def run(self, name: str, value: Any) -> Any:
        for flt in self.filters:
            match flt.run(name, value):
                case Ok(value):
                    continue
                case Err(error):
                    raise ValueError(str(error))
        return value

    def __get_pydantic_core_schema__(self, source_type: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.with_info_before_validator_function(self._validate, handler(source_type))

    def _validate(self, v: Any, info: core_schema.ValidationInfo) -> Any:
        return self.run(self.name or info.field_name or "value", v)
