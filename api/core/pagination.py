"""
Offset pagination: PageRequest, Sort, Page.

Wire format (query params):
- page: 0-based page index
- size: page size
- sort: `field[,field...][,asc|desc]`, repeatable; e.g. `sort=price,desc&sort=id`
"""

from __future__ import annotations

import dataclasses
import math
from enum import Enum
from typing import Generic, Iterable, Mapping, TypeVar

from .specification import quote_ident

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclasses.dataclass(frozen=True)
class Sort:
    field: str
    direction: SortDirection = SortDirection.ASC


def parse_sort(values: Iterable[str]) -> tuple[Sort, ...]:
    """
    Parse repeated `sort` params. A trailing `asc`/`desc` applies to every
    field listed before it in the same param.
    """
    sorts: list[Sort] = []
    for raw in values:
        parts = [p.strip() for p in (raw or "").split(",") if p.strip()]
        if not parts:
            continue
        direction = SortDirection.ASC
        if parts[-1].upper() in SortDirection.__members__:
            direction = SortDirection(parts.pop().upper())
        sorts.extend(Sort(field=part, direction=direction) for part in parts)
    return tuple(sorts)


@dataclasses.dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: tuple[Sort, ...] = ()

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclasses.dataclass
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0 or self.total <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0


def order_by_clause(sort: Iterable[Sort], allowed: Mapping[str, str]) -> str:
    """
    Render `ORDER BY` for whitelisted fields. `allowed` maps wire name -> column.
    Raises ValueError for a field that is not in `allowed`.
    """
    terms: list[str] = []
    for item in sort:
        column = allowed.get(item.field)
        if column is None:
            raise ValueError(f"No property '{item.field}' found to sort by.")
        terms.append(f"{quote_ident(column)} {item.direction.value}")
    if not terms:
        return ""
    return "ORDER BY " + ", ".join(terms)
