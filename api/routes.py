# ============================================================================
# API ROUTES
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Catalog resource HTTP endpoints
# PURPOSE: REST endpoints for every catalog resource plus raw queries
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
API Routes

One router per resource kind, all built by the same factory:

    GET    /<resource>/                 - List (include_system_schemas, limit, offset)
    GET    /<resource>/{id}             - Retrieve by id
    POST   /<resource>/                 - Create
    PATCH  /<resource>/{id}             - Update
    DELETE /<resource>/{id}?cascade=    - Drop, returns the dropped record

Resources: schemas, tables, columns, triggers, functions, policies, and
types (read-only).

    POST   /query                       - Run arbitrary SQL

Error kinds map to status codes: validation 400, not found 404, database
errors 400 with the server's message.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api.schemas import ERROR_STATUS, ErrorResponse, QueryRequest
from core.results import MetaError, MetaResult

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

_meta = None


def set_services(meta):
    """Called by main.py at startup to inject the PostgresMeta facade."""
    global _meta
    _meta = meta


def get_meta():
    """Get the PostgresMeta facade, raising 503 if not initialized."""
    if _meta is None:
        raise HTTPException(503, "Services not initialized")
    return _meta


# ============================================================================
# RESPONSE HELPERS
# ============================================================================

def error_response(error: MetaError) -> JSONResponse:
    body = ErrorResponse.from_error(error).model_dump(mode="json", exclude_none=True)
    return JSONResponse(status_code=ERROR_STATUS[error.kind], content=body)


def _dump(data: Any) -> Any:
    if isinstance(data, list):
        return [_dump(item) for item in data]
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    return data


def respond(result: MetaResult) -> Any:
    """Resource data as JSON, or the mapped error response."""
    if not result.ok:
        return error_response(result.error)
    return _dump(result.data)


# ============================================================================
# RESOURCE ROUTER FACTORY
# ============================================================================

def build_resource_router(name: str, read_only: bool = False) -> APIRouter:
    """
    Build the CRUD router for one resource kind.

    Args:
        name: Plural resource name, key in PostgresMeta.resources
        read_only: Only mount the list and retrieve endpoints
    """
    resource_router = APIRouter(prefix=f"/{name}", tags=[name])

    def resource():
        return get_meta().resources[name]

    def parse_id(res, raw: str):
        try:
            return res.id_type(raw)
        except ValueError:
            return None

    @resource_router.get("/")
    async def list_resources(
        include_system_schemas: bool = False,
        limit: Optional[int] = Query(None, ge=1),
        offset: Optional[int] = Query(None, ge=0),
    ):
        result = await resource().list(
            include_system_schemas=include_system_schemas,
            limit=limit,
            offset=offset,
        )
        return respond(result)

    @resource_router.get("/{id}")
    async def retrieve_resource(id: str):
        res = resource()
        parsed = parse_id(res, id)
        if parsed is None:
            return error_response(MetaError.validation(f"Invalid {res.kind} id {id}"))
        return respond(await res.retrieve(id=parsed))

    if read_only:
        return resource_router

    @resource_router.post("/")
    async def create_resource(body: Dict[str, Any] = Body(...)):
        return respond(await resource().create(body))

    @resource_router.patch("/{id}")
    async def update_resource(id: str, body: Dict[str, Any] = Body(...)):
        res = resource()
        parsed = parse_id(res, id)
        if parsed is None:
            return error_response(MetaError.validation(f"Invalid {res.kind} id {id}"))
        return respond(await res.update(parsed, body))

    @resource_router.delete("/{id}")
    async def remove_resource(id: str, cascade: bool = False):
        res = resource()
        parsed = parse_id(res, id)
        if parsed is None:
            return error_response(MetaError.validation(f"Invalid {res.kind} id {id}"))
        return respond(await res.remove(parsed, cascade=cascade))

    return resource_router


MUTABLE_RESOURCES = ("schemas", "tables", "columns", "triggers", "functions", "policies")
READ_ONLY_RESOURCES = ("types",)

resource_routers: List[APIRouter] = [
    *(build_resource_router(name) for name in MUTABLE_RESOURCES),
    *(build_resource_router(name, read_only=True) for name in READ_ONLY_RESOURCES),
]


# ============================================================================
# RAW QUERY
# ============================================================================

@router.post("/query", tags=["query"])
async def run_query(request: QueryRequest):
    """Run arbitrary SQL and return the rows of its last statement."""
    return respond(await get_meta().query(request.query))


for _resource_router in resource_routers:
    router.include_router(_resource_router)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "router",
    "resource_routers",
    "build_resource_router",
    "set_services",
    "get_meta",
    "respond",
    "error_response",
]
