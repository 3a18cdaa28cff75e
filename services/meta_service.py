# ============================================================================
# POSTGRES META SERVICE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain service - Facade over every catalog resource
# PURPOSE: Wire one executor into all resources and expose raw queries
# CREATED: 16 OCT 2026
# ============================================================================
"""
PostgresMeta

One object per connection pool giving access to every resource kind:

    meta = PostgresMeta.from_pool(pool)
    await meta.schemas.list()
    await meta.tables.retrieve(name="users", schema="public")
    await meta.triggers.update(42, {"is_enabled": False, "name": "audit2"})
    await meta.columns.remove("16391.2", cascade=True)
    await meta.query("SELECT now()")

Pattern: constructor injection of QueryExecutor, resources instantiated in
__init__ sharing the schema resource as their schema-listing collaborator.
"""

from typing import Any, Dict, List

from psycopg_pool import AsyncConnectionPool

from core.logging import get_logger, log_context
from core.results import MetaError, MetaResult
from repositories.column_repo import ColumnResource
from repositories.executor import QueryExecutor
from repositories.function_repo import FunctionResource
from repositories.policy_repo import PolicyResource
from repositories.schema_repo import SchemaResource
from repositories.table_repo import TableResource
from repositories.trigger_repo import TriggerResource
from repositories.type_repo import TypeResource

logger = get_logger(__name__)


class PostgresMeta:
    """Entry point to every catalog resource."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor
        self.schemas = SchemaResource(executor)
        self.tables = TableResource(executor, self.schemas)
        self.columns = ColumnResource(executor, self.schemas, self.tables)
        self.triggers = TriggerResource(executor, self.schemas)
        self.functions = FunctionResource(executor, self.schemas)
        self.policies = PolicyResource(executor, self.schemas)
        self.types = TypeResource(executor)

    @classmethod
    def from_pool(cls, pool: AsyncConnectionPool) -> "PostgresMeta":
        return cls(QueryExecutor(pool))

    @property
    def resources(self) -> Dict[str, Any]:
        """Resources by plural name, as mounted under the HTTP API."""
        return {
            "schemas": self.schemas,
            "tables": self.tables,
            "columns": self.columns,
            "triggers": self.triggers,
            "functions": self.functions,
            "policies": self.policies,
            "types": self.types,
        }

    async def query(self, statement: str) -> MetaResult[List[Dict[str, Any]]]:
        """Run arbitrary SQL text and return its rows."""
        if not statement or not statement.strip():
            return MetaResult.failure(MetaError.validation("Missing required param query"))
        with log_context(resource="query", operation="query"):
            result = await self.executor.query(statement)
            if not result.ok:
                logger.warning(f"Query failed: {result.error.message}")
            return result

    async def ping(self) -> bool:
        return await self.executor.ping()


__all__ = ["PostgresMeta"]
