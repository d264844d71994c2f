"""
Criteria -> SQL predicate translation.

A `Predicate` is a deferred conjunction of WHERE-clause fragments. Nothing is
rendered until the final statement is assembled: each fragment is a function
of a `QueryParams` collector, which hands out asyncpg placeholders ($1, $2,
...) in the order values are bound. That keeps placeholder numbering right no
matter how predicates are combined or what else the statement binds (LIMIT,
OFFSET, ...).

    params = QueryParams()
    where = where_clause(build_specification(criteria), params)
    rows = await db.fetch_all(f"SELECT ... FROM cars {where}", *params.values)

Translation per operation:

    equals              col = $n
    notEquals           col <> $n          (NULL rows never match)
    in                  col = ANY($n)
    notIn               col <> ALL($n)     (NULL rows never match)
    specified=true      col IS NOT NULL
    specified=false     col IS NULL
    greaterThan         col > $n
    lessThan            col < $n
    greaterThanOrEqual  col >= $n
    lessThanOrEqual     col <= $n
    contains            col ILIKE '%s%'    (LIKE wildcards in s escaped)
    doesNotContain      NOT (col ILIKE '%s%')

All set operations of a filter conjoin, and all non-null filters of a criteria
conjoin. There is no OR.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from .criteria import Criteria
from .filters import Filter

Fragment = Callable[["QueryParams"], str]

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


class QueryParams:
    """
    Collects bound values and returns their positional placeholders.
    """

    def __init__(self) -> None:
        self.values: list[Any] = []

    def add(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"


class Predicate:
    """
    An AND of SQL fragments. The empty predicate matches every row.
    """

    __slots__ = ("_fragments",)

    def __init__(self, fragments: tuple[Fragment, ...] = ()) -> None:
        self._fragments = fragments

    @classmethod
    def of(cls, fragment: Fragment) -> Predicate:
        return cls((fragment,))

    @property
    def is_match_all(self) -> bool:
        return not self._fragments

    def __and__(self, other: Predicate) -> Predicate:
        return Predicate(self._fragments + other._fragments)

    def render(self, params: QueryParams) -> str:
        if not self._fragments:
            return "TRUE"
        return " AND ".join(fragment(params) for fragment in self._fragments)

    def __repr__(self) -> str:
        params = QueryParams()
        return f"Predicate({self.render(params)!r}, {params.values!r})"


MATCH_ALL = Predicate()


def where_clause(predicate: Predicate, params: QueryParams) -> str:
    if predicate.is_match_all:
        return ""
    return "WHERE " + predicate.render(params)


def quote_ident(column: str) -> str:
    """
    Double-quote a column name. Only plain lowercase identifiers are allowed.
    """
    if not _IDENTIFIER.match(column or ""):
        raise ValueError(f"Invalid column name: {column!r}")
    return f'"{column}"'


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _compare(column: str, operator: str, value: Any) -> Predicate:
    return Predicate.of(lambda params: f"{column} {operator} {params.add(value)}")


def _value_in(column: str, values: list[Any]) -> Predicate:
    return Predicate.of(lambda params: f"{column} = ANY({params.add(list(values))})")


def _value_not_in(column: str, values: list[Any]) -> Predicate:
    return Predicate.of(lambda params: f"{column} <> ALL({params.add(list(values))})")


def _specified(column: str, specified: bool) -> Predicate:
    if specified:
        return Predicate.of(lambda _: f"{column} IS NOT NULL")
    return Predicate.of(lambda _: f"{column} IS NULL")


def _contains(column: str, value: str) -> Predicate:
    pattern = f"%{escape_like(value)}%"
    return Predicate.of(lambda params: f"{column} ILIKE {params.add(pattern)}")


def _does_not_contain(column: str, value: str) -> Predicate:
    pattern = f"%{escape_like(value)}%"
    return Predicate.of(lambda params: f"NOT ({column} ILIKE {params.add(pattern)})")


# Filter attribute name -> predicate factory(quoted column, value).
OPERATIONS: dict[str, Callable[[str, Any], Predicate]] = {
    "equals": lambda column, value: _compare(column, "=", value),
    "not_equals": lambda column, value: _compare(column, "<>", value),
    "in_": _value_in,
    "not_in": _value_not_in,
    "specified": _specified,
    "greater_than": lambda column, value: _compare(column, ">", value),
    "less_than": lambda column, value: _compare(column, "<", value),
    "greater_than_or_equal": lambda column, value: _compare(column, ">=", value),
    "less_than_or_equal": lambda column, value: _compare(column, "<=", value),
    "contains": _contains,
    "does_not_contain": _does_not_contain,
}


def build_filter_predicate(filter_: Filter | None, column: str) -> Predicate:
    """
    Predicate for one filter against one column. An empty filter gives MATCH_ALL.
    """
    if filter_ is None:
        return MATCH_ALL
    quoted = quote_ident(column)
    predicate = MATCH_ALL
    for name, value in filter_.operations().items():
        predicate = predicate & OPERATIONS[name](quoted, value)
    return predicate


def build_specification(criteria: Criteria | None) -> Predicate:
    """
    Conjunction of every non-null filter in `criteria`. `None` matches everything.
    """
    if criteria is None:
        return MATCH_ALL
    predicate = MATCH_ALL
    for field_name, filter_ in criteria.active_filters().items():
        predicate = predicate & build_filter_predicate(filter_, criteria.column_for(field_name))
    return predicate
