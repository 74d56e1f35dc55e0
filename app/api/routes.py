"""Root API router."""

from fastapi import APIRouter

from app.api.endpoints import auth, restaurants

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}


router.include_router(auth.router)
router.include_router(restaurants.router)
