"""
Car REST endpoints (`/api/cars`).

List and count accept criteria as `field.operation=value` query params, e.g.
`GET /api/cars?make.equals=Toyota&price.lessThan=30000&sort=price,desc`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, Response, status
from fastapi.datastructures import URL
from pydantic import ValidationError

from core import settings
from core.filters import INT64_MAX, INT64_MIN
from core.pagination import DEFAULT_PAGE_SIZE, Page, PageRequest, parse_sort

from . import query_service, schemas, service

router = APIRouter(prefix="/api/cars")


def get_criteria(request: Request) -> schemas.CarCriteria:
    try:
        return schemas.CarCriteria.from_query_params(request.query_params.multi_items())
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc


def get_page_request(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    sort: list[str] = Query(default=[]),
) -> PageRequest:
    sorts = parse_sort(sort)
    sortable = schemas.CarCriteria.sortable_columns()
    for item in sorts:
        if item.field not in sortable:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"No property '{item.field}' found to sort by.",
            )
    page_request = PageRequest(page=page, size=min(size, settings.page_size_max()), sort=sorts)
    if page_request.offset > INT64_MAX:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Page {page} is out of range.",
        )
    return page_request


def pagination_links(url: URL, page: Page) -> str:
    """
    RFC 5988 `Link` header value with next, prev, last and first page URLs.
    """
    links = []

    def add(number: int, rel: str) -> None:
        target = url.include_query_params(page=number, size=page.size)
        links.append(f'<{target}>; rel="{rel}"')

    if page.has_next:
        add(page.page + 1, "next")
    if page.has_previous:
        add(page.page - 1, "prev")
    add(max(page.total_pages - 1, 0), "last")
    add(0, "first")
    return ", ".join(links)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_car(
    payload: schemas.CarCreateRequest,
    response: Response,
) -> schemas.CarResponse:
    car = await service.create_car(payload)
    response.headers["Location"] = f"/api/cars/{car.id}"
    return car


@router.put("")
async def update_car(payload: schemas.CarUpdateRequest) -> schemas.CarResponse:
    return await service.update_car(payload)


@router.get("")
async def list_cars(
    request: Request,
    response: Response,
    criteria: schemas.CarCriteria = Depends(get_criteria),
    page_request: PageRequest = Depends(get_page_request),
) -> list[schemas.CarResponse]:
    page = await query_service.find_by_criteria_page(criteria, page_request)
    response.headers["X-Total-Count"] = str(page.total)
    response.headers["Link"] = pagination_links(request.url, page)
    return service.to_car_responses(page.items)


@router.get("/count")
async def count_cars(criteria: schemas.CarCriteria = Depends(get_criteria)) -> int:
    return await query_service.count_by_criteria(criteria)


@router.get("/{car_id}")
async def get_car(car_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX)) -> schemas.CarResponse:
    return await service.get_car(car_id)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_car(car_id: int = Path(..., ge=INT64_MIN, le=INT64_MAX)) -> Response:
    await service.delete_car(car_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
