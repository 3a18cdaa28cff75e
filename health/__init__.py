# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Infrastructure - Health probes
# PURPOSE: Kubernetes liveness and readiness probes
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Health Check Module

- /livez: Process alive (instant, for Kubernetes liveness probe)
- /readyz: Database reachable (for Kubernetes readiness probe)

Usage:
    from health import health_router, set_health_services

    set_health_services(meta)
    app.include_router(health_router)
"""

from health.core import HealthStatus
from health.router import health_router, set_health_services, check_database

__all__ = [
    "HealthStatus",
    "health_router",
    "set_health_services",
    "check_database",
]
