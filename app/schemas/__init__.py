"""Expose schemas for easier import."""

from app.schemas.restaurant import RestaurantCreate, RestaurantFilters, RestaurantOut  # noqa: F401
from app.schemas.review import ReviewCreate, ReviewDetail, ReviewOut  # noqa: F401
from app.schemas.user import LoginRequest, UserOut  # noqa: F401
