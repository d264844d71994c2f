"""Tests for the car repository's SQL assembly (database calls are faked)."""

import pytest

from cars import repository
from cars.schemas import CarCriteria
from core import db
from core.filters import FloatFilter, StringFilter
from core.pagination import PageRequest, Sort, SortDirection
from core.specification import MATCH_ALL, build_specification


def _normalize(sql: str) -> str:
    return " ".join(sql.split())


class _FakeDb:
    def __init__(self, rows=None, value=0, row=None):
        self.rows = rows or []
        self.value = value
        self.row = row
        self.calls = []

    async def fetch_all(self, sql, *args):
        self.calls.append(("fetch_all", _normalize(sql), args))
        return self.rows

    async def fetch_value(self, sql, *args):
        self.calls.append(("fetch_value", _normalize(sql), args))
        return self.value

    async def fetch_one(self, sql, *args):
        self.calls.append(("fetch_one", _normalize(sql), args))
        return self.row


@pytest.fixture
def fake_db(monkeypatch):
    fake = _FakeDb()
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    monkeypatch.setattr(db, "fetch_value", fake.fetch_value)
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    return fake


@pytest.mark.asyncio
async def test_find_all_without_filters_has_no_where_clause(fake_db):
    fake_db.rows = [{"id": 1, "make": "Toyota", "model": "Corolla", "price": 20000.0}]

    rows = await repository.find_all(MATCH_ALL)

    assert rows == fake_db.rows
    [(kind, sql, args)] = fake_db.calls
    assert kind == "fetch_all"
    assert sql == "SELECT id, make, model, price FROM cars"
    assert args == ()


@pytest.mark.asyncio
async def test_find_all_renders_predicate_and_sort(fake_db):
    predicate = build_specification(CarCriteria(make=StringFilter(equals="Toyota")))

    await repository.find_all(predicate, sort=(Sort("price", SortDirection.DESC),))

    [(_, sql, args)] = fake_db.calls
    assert sql == (
        'SELECT id, make, model, price FROM cars WHERE "make" = $1 ORDER BY "price" DESC'
    )
    assert args == ("Toyota",)


@pytest.mark.asyncio
async def test_find_page_binds_limit_and_offset_after_filter_values(fake_db):
    fake_db.value = 42
    predicate = build_specification(
        CarCriteria(price=FloatFilter(greater_than_or_equal=1.0, less_than_or_equal=2.0))
    )

    page = await repository.find_page(
        predicate,
        PageRequest(page=2, size=10, sort=(Sort("id", SortDirection.DESC),)),
    )

    assert page.total == 42
    assert page.page == 2
    assert page.size == 10

    (count_kind, count_sql, count_args), (select_kind, select_sql, select_args) = fake_db.calls
    assert count_kind == "fetch_value"
    assert count_sql == 'SELECT COUNT(*) FROM cars WHERE "price" >= $1 AND "price" <= $2'
    assert count_args == (1.0, 2.0)

    assert select_kind == "fetch_all"
    assert select_sql == (
        'SELECT id, make, model, price FROM cars WHERE "price" >= $1 AND "price" <= $2 '
        'ORDER BY "id" DESC LIMIT $3 OFFSET $4'
    )
    assert select_args == (1.0, 2.0, 10, 20)


@pytest.mark.asyncio
async def test_find_page_rejects_unknown_sort_before_querying(fake_db):
    with pytest.raises(ValueError):
        await repository.find_page(MATCH_ALL, PageRequest(sort=(Sort("color"),)))
    assert fake_db.calls == []


@pytest.mark.asyncio
async def test_count_returns_an_int(fake_db):
    fake_db.value = 3
    assert await repository.count(MATCH_ALL) == 3

    fake_db.value = None
    assert await repository.count(MATCH_ALL) == 0


@pytest.mark.asyncio
async def test_delete_reports_whether_a_row_was_removed(fake_db):
    fake_db.row = {"id": 7}
    assert await repository.delete_car(7) is True

    fake_db.row = None
    assert await repository.delete_car(8) is False
