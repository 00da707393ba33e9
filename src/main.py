"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.api import analytics, auth, items, lists, markets, profile
from src.config import get_settings
from src.errors import AppError, StorageFailure

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Shopping Tracker API ({settings.environment})")
    yield


app = FastAPI(
    title="Shopping Tracker API",
    description="Shared shopping lists with purchase tracking and spend analytics",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render domain errors with their status code."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Surface database failures as StorageFailure; nothing is retried."""
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    error = StorageFailure("The data store is unavailable")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Register routers
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(markets.router)
app.include_router(lists.router)
app.include_router(items.router)
app.include_router(analytics.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
