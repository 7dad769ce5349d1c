"""
Health check endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..schemas.common import ApiResponse
from ..utils.responses import ok
from ...core.config import get_settings

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    version: str
    service: str


@router.get("/", response_model=ApiResponse[HealthResponse])
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns the current status of the service.
    """
    settings = get_settings()
    return ok(request, data=HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        service=settings.app_name,
    ), message="OK")


@router.get("/live", response_model=ApiResponse[dict])
async def liveness_check(request: Request):
    """Liveness check: the process is up and serving requests."""
    return ok(request, data={"status": "alive"}, message="OK")


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(request: Request):
    """
    Readiness check endpoint.

    The proxy is ready once the AI gateway credential is configured. No
    upstream call is made.
    """
    gateway = get_settings().gateway
    checks = {
        "ai_gateway_credential": "ok" if gateway.is_configured else "missing",
        "ai_gateway_url": gateway.base_url,
        "model": gateway.model,
    }
    if gateway.is_configured:
        return ok(request, data={"status": "ready", "checks": checks}, message="Ready")

    body = ApiResponse[dict](
        success=False,
        message="Not ready",
        request_id=getattr(request.state, "request_id", None) or "",
        data={"status": "not_ready", "checks": checks},
    )
    return JSONResponse(status_code=503, content=body.model_dump())
