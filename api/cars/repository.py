"""
Car persistence (raw SQL).

Query functions take a `core.specification.Predicate` and render it into the
WHERE clause; the predicate decides which rows match, this module decides how
they are fetched (all rows, one page, or just the count).
"""

from __future__ import annotations

from typing import Any, Iterable

from core import db
from core.pagination import Page, PageRequest, Sort, order_by_clause
from core.specification import Predicate, QueryParams, where_clause

from .schemas import CarCriteria

CAR_COLUMNS = "id, make, model, price"

SORTABLE_COLUMNS = CarCriteria.sortable_columns()


async def insert_car(*, make: str | None, model: str | None, price: float | None) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO cars (make, model, price)
        VALUES ($1, $2, $3)
        RETURNING {CAR_COLUMNS}
        """,
        make,
        model,
        price,
    )
    if row is None:
        raise RuntimeError("Failed to insert car.")
    return row


async def update_car(
    car_id: int,
    *,
    make: str | None,
    model: str | None,
    price: float | None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE cars
        SET make = $2,
            model = $3,
            price = $4
        WHERE id = $1
        RETURNING {CAR_COLUMNS}
        """,
        car_id,
        make,
        model,
        price,
    )


async def get_car(car_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {CAR_COLUMNS}
        FROM cars
        WHERE id = $1
        """,
        car_id,
    )


async def delete_car(car_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM cars
        WHERE id = $1
        RETURNING id
        """,
        car_id,
    )
    return row is not None


async def find_all(predicate: Predicate, *, sort: Iterable[Sort] = ()) -> list[dict[str, Any]]:
    """
    Every car matching `predicate`, in table order unless `sort` is given.
    """
    params = QueryParams()
    where = where_clause(predicate, params)
    order_by = order_by_clause(sort, SORTABLE_COLUMNS)
    return await db.fetch_all(
        f"""
        SELECT {CAR_COLUMNS}
        FROM cars
        {where}
        {order_by}
        """,
        *params.values,
    )


async def find_page(predicate: Predicate, page_request: PageRequest) -> Page[dict[str, Any]]:
    """
    One page of cars matching `predicate`, plus the total match count.
    """
    order_by = order_by_clause(page_request.sort, SORTABLE_COLUMNS)
    total = await count(predicate)

    params = QueryParams()
    where = where_clause(predicate, params)
    limit = params.add(page_request.size)
    offset = params.add(page_request.offset)
    rows = await db.fetch_all(
        f"""
        SELECT {CAR_COLUMNS}
        FROM cars
        {where}
        {order_by}
        LIMIT {limit} OFFSET {offset}
        """,
        *params.values,
    )
    return Page(items=rows, total=total, page=page_request.page, size=page_request.size)


async def count(predicate: Predicate) -> int:
    params = QueryParams()
    where = where_clause(predicate, params)
    value = await db.fetch_value(
        f"""
        SELECT COUNT(*)
        FROM cars
        {where}
        """,
        *params.values,
    )
    return int(value or 0)
