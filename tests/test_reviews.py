from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, inspect, select

from app.models.enums import CuisineType
from app.models.review import Review
from app.services import reviews as review_service
from app.services.errors import NotFound, ValidationFailed, ValidationReason
from app.services.reviews import create_review, list_reviews

COMMENT = "Great food and excellent service!"


def _review_count(db) -> int:
    return db.execute(select(func.count()).select_from(Review)).scalar_one()


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def restaurant(make_restaurant):
    return make_restaurant("Tony's Pizza", CuisineType.ITALIAN)


# ── Success ──────────────────────────────────────────────────────────────


def test_creates_a_review(db, user, restaurant):
    review = create_review(db, user, restaurant, COMMENT)

    assert review.id is not None
    assert review.user_id == user.id
    assert review.restaurant_id == restaurant.id
    assert review.comment == COMMENT
    assert _review_count(db) == 1


def test_sets_timestamps(db, user, restaurant):
    before = datetime.now()
    review = create_review(db, user, restaurant, COMMENT)
    assert before <= review.created_at <= datetime.now()
    assert before <= review.updated_at <= datetime.now()


def test_accepts_primary_keys(db, user, restaurant):
    review = create_review(db, user.id, restaurant.id, COMMENT)
    assert db.get(Review, review.id).comment == COMMENT


def test_review_is_visible_to_another_session(db, session_factory, user, restaurant):
    review = create_review(db, user, restaurant, COMMENT)
    other = session_factory()
    try:
        assert other.get(Review, review.id).comment == COMMENT
    finally:
        other.close()


# ── Comment bounds ───────────────────────────────────────────────────────


@pytest.mark.parametrize("length", [10, 1000])
def test_boundary_lengths_succeed(db, user, restaurant, length):
    comment = "a" * length
    assert create_review(db, user, restaurant, comment).comment == comment


@pytest.mark.parametrize(
    "comment, reason",
    [
        (None, ValidationReason.BLANK),
        ("", ValidationReason.BLANK),
        ("          ", ValidationReason.BLANK),
        ("Too short", ValidationReason.TOO_SHORT),
        ("a" * 1001, ValidationReason.TOO_LONG),
    ],
)
def test_invalid_comment(db, user, restaurant, comment, reason):
    with pytest.raises(ValidationFailed) as excinfo:
        create_review(db, user, restaurant, comment)
    assert excinfo.value.field == "comment"
    assert excinfo.value.reason is reason
    assert _review_count(db) == 0


# ── References ───────────────────────────────────────────────────────────


@pytest.mark.parametrize("missing_user", [None, 12345])
def test_missing_user(db, restaurant, missing_user):
    with pytest.raises(ValidationFailed) as excinfo:
        create_review(db, missing_user, restaurant, COMMENT)
    assert (excinfo.value.field, excinfo.value.reason) == ("user", ValidationReason.MISSING)
    assert _review_count(db) == 0


@pytest.mark.parametrize("missing_restaurant", [None, 12345])
def test_missing_restaurant(db, user, missing_restaurant):
    with pytest.raises(ValidationFailed) as excinfo:
        create_review(db, user, missing_restaurant, COMMENT)
    assert (excinfo.value.field, excinfo.value.reason) == ("restaurant", ValidationReason.MISSING)
    assert _review_count(db) == 0


def test_comment_is_checked_before_references(db):
    with pytest.raises(ValidationFailed) as excinfo:
        create_review(db, None, None, "short")
    assert excinfo.value.field == "comment"


# ── Duplicates ───────────────────────────────────────────────────────────


def test_second_review_for_same_pair_is_rejected(db, user, restaurant):
    create_review(db, user, restaurant, COMMENT)

    with pytest.raises(ValidationFailed) as excinfo:
        create_review(db, user, restaurant, "Came back and it was even better.")

    assert (excinfo.value.field, excinfo.value.reason) == ("user", ValidationReason.DUPLICATE_REVIEW)
    assert _review_count(db) == 1


def test_different_users_same_restaurant(db, make_user, restaurant):
    create_review(db, make_user(), restaurant, COMMENT)
    create_review(db, make_user(), restaurant, COMMENT)
    assert _review_count(db) == 2


def test_same_user_different_restaurants(db, user, make_restaurant):
    create_review(db, user, make_restaurant("Le Bistro", CuisineType.FRENCH), COMMENT)
    create_review(db, user, make_restaurant("El Taco", CuisineType.MEXICAN), COMMENT)
    assert _review_count(db) == 2


def test_storage_constraint_violation_maps_to_duplicate(db, user, restaurant, monkeypatch):
    create_review(db, user, restaurant, COMMENT)
    # let the application-level check miss so the unique constraint fires
    monkeypatch.setattr(review_service, "review_exists", lambda *args: False)

    with pytest.raises(ValidationFailed) as excinfo:
        create_review(db, user, restaurant, COMMENT)

    assert excinfo.value.reason is ValidationReason.DUPLICATE_REVIEW
    assert _review_count(db) == 1


def test_failure_mid_transaction_rolls_back(db, user, restaurant, monkeypatch):
    def _boom(*args):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(review_service, "review_exists", _boom)
    with pytest.raises(RuntimeError):
        create_review(db, user, restaurant, COMMENT)

    monkeypatch.undo()
    assert _review_count(db) == 0
    assert create_review(db, user, restaurant, COMMENT).id is not None


def test_concurrent_creates_for_same_pair(session_factory, user, restaurant):
    barrier = threading.Barrier(2)
    user_id, restaurant_id = user.id, restaurant.id

    def _attempt(comment: str):
        session = session_factory()
        try:
            barrier.wait(timeout=5)
            return create_review(session, user_id, restaurant_id, comment).id
        except ValidationFailed as exc:
            return exc
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=2) as pool:
        outcomes = list(pool.map(_attempt, [COMMENT, "Another take on the same dinner."]))

    created = [o for o in outcomes if isinstance(o, int)]
    rejected = [o for o in outcomes if isinstance(o, ValidationFailed)]
    assert len(created) == 1
    assert len(rejected) == 1
    assert rejected[0].reason is ValidationReason.DUPLICATE_REVIEW

    check = session_factory()
    try:
        assert check.execute(select(func.count()).select_from(Review)).scalar_one() == 1
    finally:
        check.close()


# ── Listing ──────────────────────────────────────────────────────────────


def test_list_reviews_orders(db, make_user, restaurant, make_restaurant):
    now = datetime.now()
    older = Review(user_id=make_user().id, restaurant_id=restaurant.id, comment=COMMENT, created_at=now - timedelta(days=2))
    newer = Review(user_id=make_user().id, restaurant_id=restaurant.id, comment=COMMENT, created_at=now - timedelta(days=1))
    other = make_restaurant("Elsewhere", CuisineType.THAI)
    unrelated = Review(user_id=make_user().id, restaurant_id=other.id, comment=COMMENT, created_at=now)
    db.add_all([older, newer, unrelated])
    db.commit()

    assert list_reviews(db, restaurant) == [newer, older]
    assert list_reviews(db, restaurant.id, order="oldest") == [older, newer]


def test_list_reviews_unknown_restaurant(db):
    with pytest.raises(NotFound):
        list_reviews(db, 999)


def test_list_reviews_loads_authors_up_front(db, session_factory, make_user, restaurant):
    for _ in range(3):
        create_review(db, make_user(), restaurant, COMMENT)

    fresh = session_factory()
    try:
        listed = list_reviews(fresh, restaurant.id)
        assert len(listed) == 3
        assert all("user" not in inspect(r).unloaded for r in listed)
    finally:
        fresh.close()
