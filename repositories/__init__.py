# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Database access layer
# PURPOSE: Connection pool, query execution and catalog queries
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Repositories Module

Database access for catalog resources. Uses psycopg3 async with connection
pooling.

Resource classes build on infrastructure.base_repository and are imported
from their own modules:

    from repositories import DatabasePool, QueryExecutor
    from repositories.schema_repo import SchemaResource
    from repositories.trigger_repo import TriggerResource

    async with DatabasePool() as pool:
        executor = QueryExecutor(pool)
        triggers = TriggerResource(executor, schemas=SchemaResource(executor))
        result = await triggers.list()
"""

from .database import get_pool, init_pool, close_pool, DatabasePool
from .executor import QueryExecutor

__all__ = [
    "get_pool",
    "init_pool",
    "close_pool",
    "DatabasePool",
    "QueryExecutor",
]
