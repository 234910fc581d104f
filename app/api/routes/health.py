"""
Health check endpoints for the FormRelay API.

Provides:
- /live - Liveness check (service alive)
- /ready - Readiness check (holding directory writable, mail account set)
"""
import os
from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.config import settings

router = APIRouter(tags=["health"])


class ServiceHealth(BaseModel):
    """Health status of an individual dependency."""

    status: Literal["healthy", "unhealthy"]
    message: Optional[str] = None


class ReadinessResponse(BaseModel):
    status: Literal["ready", "not_ready"]
    version: str
    environment: str
    timestamp: datetime
    services: Dict[str, ServiceHealth]


def check_upload_dir(request: Request) -> ServiceHealth:
    directory = request.app.state.upload_handler.directory
    if not directory.is_dir():
        return ServiceHealth(status="unhealthy", message="Upload directory missing")
    if not os.access(directory, os.W_OK):
        return ServiceHealth(status="unhealthy", message="Upload directory not writable")
    return ServiceHealth(status="healthy")


def check_mail_account() -> ServiceHealth:
    if not settings.mail_configured:
        return ServiceHealth(status="unhealthy", message="Mail account not configured")
    if not settings.mail_recipient:
        return ServiceHealth(status="unhealthy", message="Mail recipient not configured")
    return ServiceHealth(status="healthy")


@router.get("/live", summary="Liveness check")
async def live():
    return {"status": "alive"}


@router.get("/ready", response_model=ReadinessResponse, summary="Readiness check")
async def ready(request: Request):
    services = {
        "uploads": check_upload_dir(request),
        "mail": check_mail_account(),
    }
    is_ready = all(s.status == "healthy" for s in services.values())
    body = ReadinessResponse(
        status="ready" if is_ready else "not_ready",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=datetime.now(timezone.utc),
        services=services,
    )
    return JSONResponse(
        status_code=200 if is_ready else 503,
        content=body.model_dump(mode="json"),
    )
