"""
Criteria queries over cars.

The main input is a `CarCriteria`, converted to a `Predicate` in which every
filter must apply. Results are a list of cars, a page of cars, or a count.
Read-only; database errors propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from core.pagination import Page, PageRequest, Sort
from core.specification import Predicate, build_specification

from . import repository
from .schemas import CarCriteria

logger = logging.getLogger(__name__)


def create_specification(criteria: CarCriteria | None) -> Predicate:
    return build_specification(criteria)


async def find_by_criteria(
    criteria: CarCriteria | None,
    *,
    sort: Iterable[Sort] = (),
) -> list[dict[str, Any]]:
    """
    All cars matching `criteria`.
    """
    logger.debug("find by criteria : %s", criteria)
    specification = create_specification(criteria)
    return await repository.find_all(specification, sort=sort)


async def find_by_criteria_page(
    criteria: CarCriteria | None,
    page_request: PageRequest,
) -> Page[dict[str, Any]]:
    """
    One page of cars matching `criteria`.
    """
    logger.debug("find by criteria : %s, page: %s", criteria, page_request)
    specification = create_specification(criteria)
    return await repository.find_page(specification, page_request)


async def count_by_criteria(criteria: CarCriteria | None) -> int:
    """
    Number of cars matching `criteria`.
    """
    logger.debug("count by criteria : %s", criteria)
    specification = create_specification(criteria)
    return await repository.count(specification)
