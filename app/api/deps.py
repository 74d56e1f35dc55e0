"""Request dependencies shared by endpoints."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User | None:
    """Return the logged-in user from the session, or ``None``."""
    user_id = request.session.get("user_id")
    if user_id is None:
        return None
    return db.get(User, user_id)


def require_user(user: User | None = Depends(get_current_user)) -> User:
    """Raise 401 if no user is logged in."""
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
