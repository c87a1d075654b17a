from typing import Annotated

import structlog
from fastapi import APIRouter, Depends

from ....application.ports.outbound import BackendError
from ....infrastructure.backend import BackendClient
from ....infrastructure.logging import Timer
from ...api.dependencies import get_backend_client

router = APIRouter(tags=["health"])
logger = structlog.get_logger()


@router.get("/health", summary="Health check")
async def health() -> dict:
    """Basic health check for load balancer."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness check")
async def readiness(
    client: Annotated[BackendClient, Depends(get_backend_client)],
) -> dict:
    """Readiness check - verifies the backend is reachable."""
    checks = {}

    try:
        with Timer() as t:
            await client.request("GET", "/auth/v1/health")
        checks["backend"] = {"status": "healthy", "latency_ms": t.duration_ms}
    except BackendError as e:
        logger.error("Backend health check failed", error=str(e))
        checks["backend"] = {"status": "unhealthy", "error": str(e)}

    all_healthy = all(c.get("status") == "healthy" for c in checks.values())

    return {
        "status": "ready" if all_healthy else "degraded",
        "checks": checks,
    }
