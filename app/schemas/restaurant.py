"""Pydantic schemas for restaurants and search filters."""

import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from app.models.enums import CuisineType

# A bound no tier can satisfy; non-numeric max_price values map here.
UNSATISFIABLE_PRICE = 0
# Storage integers are signed 64-bit; larger bounds admit every tier.
MAX_PRICE_BOUND = 2**63 - 1
MIN_PRICE_BOUND = -(2**63)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clamp(bound: int) -> int:
    return max(MIN_PRICE_BOUND, min(MAX_PRICE_BOUND, bound))


def _floor_bound(value: float) -> int:
    if math.isnan(value) or value == -math.inf:
        return UNSATISFIABLE_PRICE
    if value == math.inf:
        return MAX_PRICE_BOUND
    return _clamp(math.floor(value))


class RestaurantFilters(BaseModel):
    """Optional search predicates; ``None`` means "not provided"."""

    name: Optional[str] = None
    cuisine_type: Optional[str] = None
    max_price: Optional[int] = None

    model_config = {"extra": "ignore"}

    @field_validator("name", mode="before")
    @classmethod
    def blank_name(cls, v):
        return None if _is_blank(v) else str(v)

    @field_validator("cuisine_type", mode="before")
    @classmethod
    def cuisine_token(cls, v):
        if isinstance(v, CuisineType):
            return v.value
        return None if _is_blank(v) else str(v)

    @field_validator("max_price", mode="before")
    @classmethod
    def price_bound(cls, v):
        if _is_blank(v):
            return None
        if isinstance(v, bool):
            return UNSATISFIABLE_PRICE
        if isinstance(v, int):
            return _clamp(v)
        if isinstance(v, float):
            return _floor_bound(v)
        text = str(v).strip()
        try:
            return _clamp(int(text))
        except ValueError:
            pass
        try:
            return _floor_bound(float(text))
        except ValueError:
            return UNSATISFIABLE_PRICE


class RestaurantOut(BaseModel):
    id: int
    name: str
    cuisine_type: CuisineType
    price_range: int
    address: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RestaurantCreate(BaseModel):
    name: str
    cuisine_type: CuisineType
    price_range: int
    address: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None
