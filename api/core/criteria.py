"""
Criteria: a bundle of optional per-field filters for one entity.

Subclasses declare one optional `Filter` field per queryable attribute:

    class CarCriteria(Criteria):
        id: IntFilter | None = None
        make: StringFilter | None = None

Unset fields impose no constraint. Instances compare structurally and
`copy()` returns an independent deep copy.

`from_query_params` binds `field.operation=value` pairs, e.g.
`/api/cars?price.greaterThanOrEqual=5&make.contains=oy&id.specified=true`.
"""

from __future__ import annotations

import typing
from typing import Any, ClassVar, Iterable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .filters import Filter, wire_name

# Operations whose value is a collection; accept "a,b" and repeated keys.
LIST_OPERATIONS = frozenset({"in", "notIn"})


def _filter_type(annotation: Any) -> type[Filter] | None:
    if typing.get_origin(annotation) is None and isinstance(annotation, type) and issubclass(annotation, Filter):
        return annotation
    for arg in typing.get_args(annotation):
        found = _filter_type(arg)
        if found is not None:
            return found
    return None


class Criteria(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    # Field name -> column name, only where they differ.
    columns: ClassVar[dict[str, str]] = {}

    @classmethod
    def filter_fields(cls) -> dict[str, type[Filter]]:
        fields: dict[str, type[Filter]] = {}
        for name, field in cls.model_fields.items():
            filter_cls = _filter_type(field.annotation)
            if filter_cls is not None:
                fields[name] = filter_cls
        return fields

    @classmethod
    def column_for(cls, field_name: str) -> str:
        return cls.columns.get(field_name, field_name)

    @classmethod
    def sortable_columns(cls) -> dict[str, str]:
        """
        Wire name -> column for every filterable field; used to whitelist `sort`.
        """
        return {
            wire_name(name, cls.model_fields[name]): cls.column_for(name)
            for name in cls.filter_fields()
        }

    def active_filters(self) -> dict[str, Filter]:
        return {
            name: getattr(self, name)
            for name in type(self).filter_fields()
            if getattr(self, name) is not None
        }

    def copy(self):  # type: ignore[override]
        return self.model_copy(deep=True)

    def __str__(self) -> str:
        parts = ", ".join(f"{name}={value}" for name, value in self.active_filters().items())
        return f"{type(self).__name__}({parts})"

    @classmethod
    def from_query_params(cls, params: Iterable[tuple[str, str]]):
        """
        Build criteria from `field.operation=value` pairs.

        Keys without a dot, unknown fields, unknown operations, empty values and
        `in`/`notIn` lists with no items are ignored, so non-filter params
        (page, size, sort) can share the same query string. Scalar values are
        passed through untouched, whitespace included. Raises
        `pydantic.ValidationError` when a value cannot be coerced to the
        field's type.
        """
        fields = cls.filter_fields()
        by_wire_name = {wire_name(name, cls.model_fields[name]): name for name in fields}

        raw: dict[str, dict[str, Any]] = {}
        for key, value in params:
            field_key, sep, operation = key.partition(".")
            if not sep:
                continue
            field_name = by_wire_name.get(field_key) or (field_key if field_key in fields else None)
            if field_name is None:
                continue
            if operation not in fields[field_name].operation_names():
                continue

            if not value:
                continue

            if operation in LIST_OPERATIONS:
                # Only collection items are trimmed; scalar operands stay verbatim.
                items = [item.strip() for item in value.split(",") if item.strip()]
                if not items:
                    continue
                raw.setdefault(field_name, {}).setdefault(operation, []).extend(items)
            else:
                raw.setdefault(field_name, {})[operation] = value

        return cls.model_validate(raw)
