"""Review creation with the one-review-per-user-per-restaurant rule."""

from __future__ import annotations

from typing import Literal, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.models.restaurant import Restaurant
from app.models.review import UNIQUE_USER_RESTAURANT, Review
from app.models.user import User
from app.services.errors import NotFound, ValidationFailed, ValidationReason

COMMENT_MIN_LENGTH = 10
COMMENT_MAX_LENGTH = 1000

UserRef = Optional[Union[User, int]]
RestaurantRef = Optional[Union[Restaurant, int]]


def validate_comment(comment: str | None) -> str:
    if comment is None or not comment.strip():
        raise ValidationFailed("comment", ValidationReason.BLANK)
    if len(comment) < COMMENT_MIN_LENGTH:
        raise ValidationFailed("comment", ValidationReason.TOO_SHORT)
    if len(comment) > COMMENT_MAX_LENGTH:
        raise ValidationFailed("comment", ValidationReason.TOO_LONG)
    return comment


def _ref_id(ref) -> int | None:
    if ref is None:
        return None
    if isinstance(ref, int):
        return ref
    return ref.id


def _resolve_user(db: Session, ref: UserRef) -> User:
    user_id = _ref_id(ref)
    user = db.get(User, user_id) if user_id is not None else None
    if user is None:
        raise NotFound("user", user_id)
    return user


def _lock_restaurant(db: Session, ref: RestaurantRef) -> Restaurant:
    # FOR UPDATE serializes concurrent creates for the same restaurant;
    # SQLite drops the clause and relies on its database-wide write lock.
    restaurant_id = _ref_id(ref)
    restaurant = None
    if restaurant_id is not None:
        stmt = select(Restaurant).where(Restaurant.id == restaurant_id).with_for_update()
        restaurant = db.execute(stmt).scalar_one_or_none()
    if restaurant is None:
        raise NotFound("restaurant", restaurant_id)
    return restaurant


def review_exists(db: Session, user_id: int, restaurant_id: int) -> bool:
    stmt = select(Review.id).where(
        Review.user_id == user_id,
        Review.restaurant_id == restaurant_id,
    )
    return db.execute(stmt).first() is not None


def _is_duplicate_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig)
    return UNIQUE_USER_RESTAURANT in text or "reviews.user_id, reviews.restaurant_id" in text


def create_review(db: Session, user: UserRef, restaurant: RestaurantRef, comment: str | None) -> Review:
    """Validate and persist one review inside a single transaction.

    Raises ValidationFailed for a bad comment, a missing user or restaurant,
    or an existing review for the same (user, restaurant) pair. Nothing is
    persisted when any check fails.
    """
    comment = validate_comment(comment)

    try:
        try:
            author = _resolve_user(db, user)
        except NotFound as exc:
            raise ValidationFailed("user", ValidationReason.MISSING) from exc
        try:
            target = _lock_restaurant(db, restaurant)
        except NotFound as exc:
            raise ValidationFailed("restaurant", ValidationReason.MISSING) from exc

        if review_exists(db, author.id, target.id):
            raise ValidationFailed("user", ValidationReason.DUPLICATE_REVIEW)

        review = Review(user_id=author.id, restaurant_id=target.id, comment=comment)
        db.add(review)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_duplicate_violation(exc):
            raise ValidationFailed("user", ValidationReason.DUPLICATE_REVIEW) from exc
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(review)
    return review


def list_reviews(
    db: Session,
    restaurant: RestaurantRef,
    order: Literal["recent", "oldest"] = "recent",
) -> list[Review]:
    """Reviews of one restaurant, newest first by default."""
    restaurant_id = _ref_id(restaurant)
    if restaurant_id is None or db.get(Restaurant, restaurant_id) is None:
        raise NotFound("restaurant", restaurant_id)
    created = Review.created_at.desc() if order == "recent" else Review.created_at.asc()
    tie = Review.id.desc() if order == "recent" else Review.id.asc()
    stmt = (
        select(Review)
        .where(Review.restaurant_id == restaurant_id)
        .options(selectinload(Review.user))
        .order_by(created, tie)
    )
    return list(db.execute(stmt).scalars().all())
