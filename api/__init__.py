# ============================================================================
# API MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - FastAPI routes
# PURPOSE: HTTP API for catalog resources and type generation
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
API Module

FastAPI routes for the metadata service.
"""

from .routes import router, set_services
from .generator_routes import router as generator_router, set_generator_services
from .schemas import ErrorResponse, QueryRequest

__all__ = [
    "router",
    "set_services",
    "generator_router",
    "set_generator_services",
    "ErrorResponse",
    "QueryRequest",
]
