"""
FastAPI application factory and main app configuration.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
import logging

from .api.routers import ai_clinic, health
from .core.config import get_settings
from .core.structured_logger import configure_logging
from .middleware.cors_middleware import CORSHeadersMiddleware
from .middleware.performance_middleware import PerformanceMiddleware
from .middleware.request_id_middleware import RequestIDMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger = logging.getLogger("aiclinic")
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"AI gateway: {settings.gateway.base_url} model={settings.gateway.model}")
    if not settings.gateway.is_configured:
        # Requests still get a 500 per call; startup does not fail.
        logger.warning("AI_GATEWAY_API_KEY is not configured")

    yield

    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings.logging)

    app = FastAPI(
        title="AI Clinic",
        description="Clinical assistance proxy in front of an OpenAI-compatible AI gateway",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: CORS answers preflight before anything else.
    app.add_middleware(PerformanceMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSHeadersMiddleware,
        allowed_origins=settings.cors.allowed_origins,
        allowed_headers=settings.cors.allowed_headers,
    )

    app.include_router(health.router)
    app.include_router(ai_clinic.router)

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return JSONResponse(content={
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "ai_clinic": "POST /ai-clinic",
            },
        })

    return app


# Create the app instance
app = create_app()
