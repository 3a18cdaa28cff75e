# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Kubernetes probes for the metadata service
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Health Check Router

Endpoints:
    GET /livez   - Liveness probe (is the process alive?)
                   Always 200 while the process answers.

    GET /readyz  - Readiness probe (can we serve catalog requests?)
                   200 if the database answers SELECT 1 within the timeout,
                   503 otherwise.
"""

import asyncio
import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from health.core import HealthStatus
from __version__ import __version__, BUILD_DATE

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["Health"])

READINESS_TIMEOUT_SECONDS = 5.0

_meta = None


def set_health_services(meta):
    """Called by main.py at startup to inject the PostgresMeta facade."""
    global _meta
    _meta = meta


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@health_router.get("/livez")
async def liveness_probe():
    """No external checks, just confirms the process is responsive."""
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


# ============================================================================
# READINESS PROBE
# ============================================================================

async def check_database() -> dict:
    """Ping the database and report status with timing."""
    if _meta is None:
        return {"status": HealthStatus.UNHEALTHY.value, "error": "Services not initialized"}

    started = time.monotonic()
    try:
        ok = await asyncio.wait_for(_meta.ping(), timeout=READINESS_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        ok = False
        logger.warning("Database ping timed out")
    duration_ms = round((time.monotonic() - started) * 1000, 2)

    status = HealthStatus.HEALTHY if ok else HealthStatus.UNHEALTHY
    return {"status": status.value, "duration_ms": duration_ms}


@health_router.get("/readyz")
async def readiness_probe():
    """
    Kubernetes readiness probe.

    If this fails, Kubernetes removes the pod from the service load balancer.
    """
    database = await check_database()
    if database["status"] != HealthStatus.HEALTHY.value:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"database": database}},
        )
    return {"status": "ready", "checks": {"database": database}}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "health_router",
    "set_health_services",
    "check_database",
]
