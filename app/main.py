"""
Main FastAPI application for the Weather Auth API.

This module contains the FastAPI application instance, its lifespan, and
the handler that turns service errors into JSON responses.
"""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.core.exceptions import DependencyError, ServiceError
from app.core.network import AddressNormalizer
from app.database import create_tables
from app.routers.auth import router as auth_router
from app.routers.status import router as status_router
from app.routers.weather import router as weather_router
from app.utils.logging_config import get_logger, setup_logging
from app.utils.rate_limit import limiter

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Creates missing tables, opens the shared HTTP client used for provider
    calls, and fixes the address normalization strategy for the process.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} - Application starting up")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.SQLALCHEMY_DATABASE_URI.split('://')[0]}")
    logger.info("=" * 60)

    await create_tables()

    app.state.address_normalizer = AddressNormalizer(
        mode=settings.ENVIRONMENT,
        placeholder=settings.PLACEHOLDER_IP,
    )
    if not settings.IS_PRODUCTION:
        logger.info(f"Local caller addresses will be replaced with {settings.PLACEHOLDER_IP}")

    app.state.http_client = httpx.AsyncClient()

    yield

    # Shutdown
    await app.state.http_client.aclose()
    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} - Application shutting down")
    logger.info("=" * 60)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Authenticates users and returns current weather for the caller's location",
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Render a service error as ``{"detail", "error"}`` with its status code."""
    if isinstance(exc, DependencyError):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.kind}")

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


# Include routers
app.include_router(status_router, prefix=settings.API_PREFIX)
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(weather_router, prefix=settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
