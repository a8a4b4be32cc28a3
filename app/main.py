"""FastAPI main application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import describe_validation_errors
from app.core.logging import configure_logging
from app.infra.cache import InMemoryTTLCache, RedisTTLCache
from app.infra.database import close_db, init_db
from app.infra.redis import close_redis, init_redis

logger = logging.getLogger(__name__)

TRIPS_PATH_PREFIX = "/api/v1/trips"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    configure_logging()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}, debug: {settings.DEBUG}")

    # Initialize database
    await init_db()
    logger.info("Database initialized")

    # Venue cache: Redis when enabled and reachable, otherwise in-process
    app.state.venue_cache = InMemoryTTLCache(
        default_ttl=settings.VENUE_CACHE_TTL_SECONDS,
        max_entries=settings.VENUE_CACHE_MAX_ENTRIES,
    )
    if settings.REDIS_ENABLED:
        try:
            redis = await init_redis()
            app.state.venue_cache = RedisTTLCache(
                redis,
                default_ttl=settings.VENUE_CACHE_TTL_SECONDS,
                prefix="venues",
            )
            logger.info("Using shared venue cache")
        except Exception as e:
            logger.warning(f"Redis connection failed, using in-process cache: {e}")

    yield

    # Shutdown
    logger.info("Shutting down")
    await close_db()
    await close_redis()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{success: false, error}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Invalid trip requests answer 400; other routes keep FastAPI's 422."""
    if not request.url.path.startswith(TRIPS_PATH_PREFIX):
        return await request_validation_exception_handler(request, exc)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": describe_validation_errors(exc.errors())},
    )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=f"AI-curated trip plans for {settings.DESTINATION_NAME}",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API routers
    app.include_router(api_router, prefix="/api/v1")

    # Health check endpoint (for Docker healthcheck)
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS if not settings.DEBUG else 1,
    )
