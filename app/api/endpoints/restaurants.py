"""Restaurant and review endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import require_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.restaurant import RestaurantFilters, RestaurantOut
from app.schemas.review import ReviewCreate, ReviewDetail
from app.services.errors import ValidationFailed
from app.services.reviews import create_review, list_reviews
from app.services.search import get_restaurant, search_restaurants

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("", response_model=list[RestaurantOut])
def index(
    name: str | None = None,
    cuisine_type: str | None = None,
    max_price: str | None = None,
    db: Session = Depends(get_db),
) -> list[RestaurantOut]:
    """Search restaurants; every provided filter must match."""
    filters = RestaurantFilters(name=name, cuisine_type=cuisine_type, max_price=max_price)
    restaurants = search_restaurants(db, filters)
    logger.debug("search filters=%s results=%d", filters.model_dump(exclude_none=True), len(restaurants))
    return [RestaurantOut.model_validate(r) for r in restaurants]


@router.get("/{restaurant_id}", response_model=RestaurantOut)
def show(restaurant_id: int, db: Session = Depends(get_db)) -> RestaurantOut:
    """Return a single restaurant."""
    return RestaurantOut.model_validate(get_restaurant(db, restaurant_id))


@router.get("/{restaurant_id}/reviews", response_model=list[ReviewDetail])
def reviews(restaurant_id: int, db: Session = Depends(get_db)) -> list[ReviewDetail]:
    """Return the restaurant's reviews, newest first."""
    return [ReviewDetail.model_validate(r) for r in list_reviews(db, restaurant_id, order="recent")]


@router.post("/{restaurant_id}/reviews", response_model=ReviewDetail, status_code=status.HTTP_201_CREATED)
def add_review(
    restaurant_id: int,
    payload: ReviewCreate,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
) -> ReviewDetail:
    """Post the current user's review for a restaurant."""
    restaurant = get_restaurant(db, restaurant_id)
    try:
        review = create_review(db, user=user, restaurant=restaurant, comment=payload.comment)
    except ValidationFailed as exc:
        logger.info(
            "review rejected user_id=%s restaurant_id=%s field=%s reason=%s",
            user.id, restaurant_id, exc.field, exc.reason.value,
        )
        raise
    logger.info("review created id=%s user_id=%s restaurant_id=%s", review.id, user.id, restaurant_id)
    return ReviewDetail.model_validate(review)
