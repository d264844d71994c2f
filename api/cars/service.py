"""
Car CRUD business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_car_response(row: dict) -> schemas.CarResponse:
    price = row.get("price")
    return schemas.CarResponse(
        id=int(row["id"]),
        make=row.get("make"),
        model=row.get("model"),
        price=float(price) if price is not None else None,
    )


async def create_car(payload: schemas.CarCreateRequest) -> schemas.CarResponse:
    if payload.id is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A new car cannot already have an ID.",
        )

    row = await repository.insert_car(make=payload.make, model=payload.model, price=payload.price)
    logger.info("Created car id=%s", row["id"])
    return _to_car_response(row)


async def update_car(payload: schemas.CarUpdateRequest) -> schemas.CarResponse:
    if payload.id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid id.",
        )

    row = await repository.update_car(
        payload.id,
        make=payload.make,
        model=payload.model,
        price=payload.price,
    )
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Car not found.",
        )
    logger.info("Updated car id=%s", payload.id)
    return _to_car_response(row)


async def get_car(car_id: int) -> schemas.CarResponse:
    row = await repository.get_car(car_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Car not found.",
        )
    return _to_car_response(row)


async def delete_car(car_id: int) -> None:
    deleted = await repository.delete_car(car_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Car not found.",
        )
    logger.info("Deleted car id=%s", car_id)


def to_car_responses(rows: list[dict]) -> list[schemas.CarResponse]:
    return [_to_car_response(row) for row in rows]
