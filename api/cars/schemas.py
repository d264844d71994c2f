"""
Car API schemas (request/response models) and the query criteria.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.criteria import Criteria
from core.filters import FloatFilter, Int64, IntFilter, StringFilter


class CarBase(BaseModel):
    make: str | None = Field(default=None, max_length=255)
    model: str | None = Field(default=None, max_length=255)
    price: float | None = None


class CarCreateRequest(CarBase):
    # Must be absent: ids are assigned by the database.
    id: int | None = None


class CarUpdateRequest(CarBase):
    # Required, but checked in the service so a missing id is a 400, not a 422.
    id: Int64 | None = None


class CarResponse(CarBase):
    id: int


class CarCriteria(Criteria):
    """
    Filters accepted by `GET /api/cars` and `GET /api/cars/count`, e.g.
    `/api/cars?id.greaterThan=5&make.contains=toy&price.specified=false`.
    """

    id: IntFilter | None = None
    make: StringFilter | None = None
    model: StringFilter | None = None
    price: FloatFilter | None = None
