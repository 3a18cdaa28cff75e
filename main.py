# ============================================================================
# POSTGRES METADATA SERVICE - MAIN APPLICATION
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - FastAPI application entry point
# PURPOSE: HTTP surface for catalog introspection, DDL and type generation
# CREATED: 16 OCT 2026
# ============================================================================
"""
Postgres Metadata Service Main Application

FastAPI application that:
1. Lists, creates, updates and drops schemas, tables, columns, triggers,
   functions and policies
2. Runs ad-hoc SQL via POST /query
3. Serves generated TypeScript bindings

Usage:
    uvicorn main:app --host 0.0.0.0 --port 1337
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from __version__ import __version__, BUILD_DATE, EPOCH
from core.config import get_defaults
from core.logging import configure_logging, get_logger
from repositories.database import init_pool, close_pool
from services import PostgresMeta, TypegenService
from api.routes import router, set_services
from api.generator_routes import router as generator_router, set_generator_services
from health import health_router, set_health_services

configure_logging(
    level=get_defaults().server.log_level,
    json_output=get_defaults().server.json_logs,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Opens the pool and wires services on startup, closes the pool on shutdown.
    """
    logger.info(f"Starting Postgres Metadata Service v{__version__} (Epoch {EPOCH}, Build {BUILD_DATE})")

    db = get_defaults().database
    pool = await init_pool(
        min_size=db.pool_min_size,
        max_size=db.pool_max_size,
        connection_string=db.connection_string or None,
        statement_timeout_ms=db.statement_timeout_ms,
    )
    logger.info("Database pool initialized")

    meta = PostgresMeta.from_pool(pool)
    typegen_service = TypegenService(meta)

    set_services(meta)
    set_generator_services(typegen_service)
    set_health_services(meta)

    yield

    logger.info("Shutting down Postgres Metadata Service...")
    await close_pool()
    logger.info("Postgres Metadata Service stopped")


def create_app() -> FastAPI:
    """Build the FastAPI app with all routers mounted."""
    app = FastAPI(
        title="Postgres Metadata Service",
        description=f"Epoch {EPOCH} schema introspection, DDL and type generation",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check routes (no prefix - /livez, /readyz)
    app.include_router(health_router)

    app.include_router(router)
    app.include_router(generator_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": "Postgres Metadata Service",
            "version": __version__,
            "epoch": EPOCH,
            "build_date": BUILD_DATE,
            "status": "running",
            "docs": "/docs",
        }

    return app


app = create_app()


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    server = get_defaults().server
    uvicorn.run("main:app", host=server.host, port=server.port)
