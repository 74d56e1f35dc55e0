"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from app import models  # noqa: F401
from app.api.routes import router
from app.core.config import settings
from app.db.init_db import init_db
from app.services.errors import NotFound, ValidationFailed

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(message)s",
)

app = FastAPI(title=settings.project_name)
app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)
app.include_router(router, prefix=settings.api_v1_prefix)


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(_request: Request, exc: ValidationFailed) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.as_dict()})


@app.exception_handler(NotFound)
async def not_found_handler(_request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.on_event("startup")
def on_startup() -> None:
    """Initialize database artifacts."""
    init_db()


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Basic sanity endpoint."""
    return {"message": "Foody API is running"}


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Health check endpoint for Docker."""
    return {"status": "healthy"}
