"""Restaurant search: filter predicates folded with AND, sorted by name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from sqlalchemy import and_, false, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.models.enums import CuisineType
from app.models.restaurant import Restaurant
from app.schemas.restaurant import RestaurantFilters
from app.services.errors import NotFound

FilterInput = Optional[Union[RestaurantFilters, Mapping[str, Any]]]


@dataclass(frozen=True)
class Predicate:
    """One filter, usable in memory (``test``) and in SQL (``clause``)."""

    name: str
    test: Callable[[Restaurant], bool]
    clause: ColumnElement[bool]


def coerce_filters(filters: FilterInput) -> RestaurantFilters:
    if filters is None:
        return RestaurantFilters()
    if isinstance(filters, RestaurantFilters):
        return filters
    return RestaurantFilters.model_validate(dict(filters))


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def name_predicate(needle: str) -> Predicate:
    lowered = needle.lower()
    return Predicate(
        name="name",
        test=lambda r: lowered in (r.name or "").lower(),
        clause=Restaurant.name.ilike(f"%{_escape_like(needle)}%", escape="\\"),
    )


def cuisine_predicate(token: str) -> Predicate:
    try:
        cuisine = CuisineType(token)
    except ValueError:
        # unknown cuisine: matches nothing
        return Predicate(name="cuisine_type", test=lambda r: False, clause=false())
    return Predicate(
        name="cuisine_type",
        test=lambda r: r.cuisine_type == cuisine,
        clause=Restaurant.cuisine_type == cuisine,
    )


def max_price_predicate(bound: int) -> Predicate:
    return Predicate(
        name="max_price",
        test=lambda r: r.price_range <= bound,
        clause=Restaurant.price_range <= bound,
    )


def build_predicates(filters: FilterInput) -> list[Predicate]:
    """Return the active predicates; an empty list means "everything"."""
    parsed = coerce_filters(filters)
    predicates: list[Predicate] = []
    if parsed.name is not None:
        predicates.append(name_predicate(parsed.name))
    if parsed.cuisine_type is not None:
        predicates.append(cuisine_predicate(parsed.cuisine_type))
    if parsed.max_price is not None:
        predicates.append(max_price_predicate(parsed.max_price))
    return predicates


def matches(restaurant: Restaurant, filters: FilterInput = None) -> bool:
    """In-memory conjunction of the active predicates."""
    return all(p.test(restaurant) for p in build_predicates(filters))


def search_restaurants(db: Session, filters: FilterInput = None) -> list[Restaurant]:
    """Return restaurants matching every provided filter, ordered by name."""
    stmt = select(Restaurant)
    predicates = build_predicates(filters)
    if predicates:
        stmt = stmt.where(and_(*(p.clause for p in predicates)))
    stmt = stmt.order_by(Restaurant.name.asc(), Restaurant.id.asc())
    return list(db.execute(stmt).scalars().all())


def get_restaurant(db: Session, restaurant_id: int) -> Restaurant:
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise NotFound("restaurant", restaurant_id)
    return restaurant
