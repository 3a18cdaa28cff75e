# ============================================================================
# GENERATOR ROUTES
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Type generation HTTP endpoints
# PURPOSE: Serve generated TypeScript bindings for the connected database
# CREATED: 16 OCT 2026
# ============================================================================
"""
Generator Routes

Endpoints:
- GET /generators/typescript?included_schemas=a,b&excluded_schemas=c
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from api.routes import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generators", tags=["generators"])


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

_typegen_service = None


def set_generator_services(typegen_service):
    """Called by main.py at startup to inject the typegen service."""
    global _typegen_service
    _typegen_service = typegen_service


def _get_typegen_service():
    if _typegen_service is None:
        raise HTTPException(503, "Typegen service not initialized")
    return _typegen_service


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


# ============================================================================
# TYPESCRIPT
# ============================================================================

@router.get("/typescript", response_class=PlainTextResponse)
async def generate_typescript(
    included_schemas: Optional[str] = None,
    excluded_schemas: Optional[str] = None,
):
    """
    TypeScript type bindings for the current catalog.

    Both parameters are comma-separated schema lists; when omitted the
    configured defaults apply.
    """
    svc = _get_typegen_service()
    result = await svc.generate_typescript(
        included_schemas=_split(included_schemas),
        excluded_schemas=_split(excluded_schemas),
    )
    if not result.ok:
        return error_response(result.error)
    return PlainTextResponse(result.data)


__all__ = ["router", "set_generator_services"]
