from __future__ import annotations

import os

# keep the import-time engine off PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.db.init_db import init_db
from app.db.session import build_engine, get_db
from app.main import app
from app.models.enums import CuisineType, PriceRange
from app.models.restaurant import Restaurant
from app.services.users import create_user

PASSWORD = "secret123"


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'foody.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_restaurant(db):
    def _make(name: str, cuisine: CuisineType = CuisineType.ITALIAN, price: int = PriceRange.BUDGET, **extra):
        restaurant = Restaurant(name=name, cuisine_type=cuisine, price_range=int(price), **extra)
        db.add(restaurant)
        db.commit()
        return restaurant

    return _make


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(email_address: str | None = None):
        counter["n"] += 1
        return create_user(db, email_address or f"user{counter['n']}@example.com", PASSWORD)

    return _make


@pytest.fixture
def client(session_factory):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
