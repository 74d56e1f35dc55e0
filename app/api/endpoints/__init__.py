"""Expose API endpoint routers."""

from app.api.endpoints import auth, restaurants

__all__ = ["auth", "restaurants"]
