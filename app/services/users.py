"""User accounts and password checks."""

from __future__ import annotations

import bcrypt
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.user import User


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _normalize_email(email_address: str) -> str:
    return email_address.strip().lower()


def create_user(db: Session, email_address: str, password: str) -> User:
    """Insert a user with a bcrypt password digest."""
    try:
        user = User(
            email_address=_normalize_email(email_address),
            password_digest=_hash_password(password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    except Exception:
        db.rollback()
        raise


def authenticate(db: Session, email_address: str, password: str) -> User | None:
    """Return the user when the credentials match, otherwise ``None``."""
    stmt = select(User).where(User.email_address == _normalize_email(email_address))
    user = db.execute(stmt).scalar_one_or_none()
    if user and _verify_password(password, user.password_digest):
        return user
    return None
