# ============================================================================
# API SCHEMAS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Request/Response schemas
# PURPOSE: Pydantic models for API validation
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
API Schemas

Request and response models for the API. Resource create/update bodies
are passed through as plain dicts and validated by the resource itself, so
a bad option comes back as a 400 with the resource's own message.
"""

from typing import Optional

from pydantic import BaseModel, Field

from core.results import ErrorKind, MetaError


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class QueryRequest(BaseModel):
    """Request to run arbitrary SQL."""
    query: str = Field(..., description="SQL text, may contain several statements")

    model_config = {
        "json_schema_extra": {
            "examples": [{"query": "SELECT id, name FROM public.users LIMIT 10"}]
        }
    }


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class ErrorResponse(BaseModel):
    """Body returned for validation, not-found and execution errors."""
    error: str
    kind: ErrorKind
    code: Optional[str] = None
    detail: Optional[str] = None
    hint: Optional[str] = None

    @classmethod
    def from_error(cls, error: MetaError) -> "ErrorResponse":
        return cls(
            error=error.message,
            kind=error.kind,
            code=error.code,
            detail=error.detail,
            hint=error.hint,
        )


# Error kind -> HTTP status
ERROR_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.EXECUTION: 400,
}


__all__ = [
    "QueryRequest",
    "ErrorResponse",
    "ERROR_STATUS",
]
