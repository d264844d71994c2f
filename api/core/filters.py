"""
Typed per-field filters.

A filter describes how one attribute must match: equality, membership, range,
substring or nullability. Every operation is optional; a filter with nothing
set means "no constraint".

Attribute names are snake_case; the wire names used in query strings are
camelCase (`notEquals`, `greaterThanOrEqual`, `doesNotContain`, ...). `in` is a
Python keyword, so that operation is stored as `in_`.
"""

from __future__ import annotations

from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo

T = TypeVar("T")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Integers the BIGINT columns can hold; larger values fail validation instead of the query.
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


def wire_name(name: str, field: FieldInfo) -> str:
    return field.alias or to_camel(name)


class Filter(BaseModel, Generic[T]):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    equals: T | None = None
    not_equals: T | None = None
    in_: list[T] | None = Field(default=None, alias="in")
    not_in: list[T] | None = None
    specified: bool | None = None

    @classmethod
    def operation_names(cls) -> dict[str, str]:
        """
        Map wire name -> attribute name for every operation this filter supports.
        """
        return {wire_name(name, field): name for name, field in cls.model_fields.items()}

    def operations(self) -> dict[str, Any]:
        """
        The operations that are set, keyed by attribute name, in declaration order.
        """
        return {name: getattr(self, name) for name in type(self).model_fields if getattr(self, name) is not None}

    def is_empty(self) -> bool:
        return not self.operations()

    def copy(self):  # type: ignore[override]
        return self.model_copy(deep=True)

    def __str__(self) -> str:
        fields = type(self).model_fields
        parts = ", ".join(f"{wire_name(name, fields[name])}={value!r}" for name, value in self.operations().items())
        return f"{type(self).__name__}({parts})"


class RangeFilter(Filter[T], Generic[T]):
    greater_than: T | None = None
    less_than: T | None = None
    greater_than_or_equal: T | None = None
    less_than_or_equal: T | None = None


class StringFilter(Filter[str]):
    contains: str | None = None
    does_not_contain: str | None = None


class IntFilter(RangeFilter[Int64]):
    pass


class FloatFilter(RangeFilter[float]):
    pass


class BooleanFilter(Filter[bool]):
    pass
