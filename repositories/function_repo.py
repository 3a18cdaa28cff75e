# ============================================================================
# FUNCTION REPOSITORY
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Stored function resource
# PURPOSE: List, retrieve, create, update and drop functions
# CREATED: 16 OCT 2026
# ============================================================================
"""
Function Repository

Only plain functions are listed (pg_proc.prokind = 'f'); aggregates,
window functions and procedures are not. Retrieval by name returns the
first overload in catalog order.
"""

from typing import Any, Dict, List, Tuple

from core.models.function import Function, FunctionCreate, FunctionUpdate
from core.schema.function_ddl import FunctionBuilder
from core.schema.statements import StatementBatch
from infrastructure.base_repository import MetaResource
from repositories.catalog_sql import FUNCTIONS_SQL


class FunctionResource(MetaResource[Function, FunctionCreate, FunctionUpdate]):
    """Resource for functions."""

    kind = "function"
    alias = "functions"
    list_sql = FUNCTIONS_SQL
    model = Function
    create_model = FunctionCreate
    update_model = FunctionUpdate
    builder = FunctionBuilder
    natural_key = ("name",)
    optional_key = ("schema",)
    key_defaults = {"schema": "public"}

    async def _compose_create(
        self,
        options: FunctionCreate,
        known_schemas: List[str],
    ) -> Tuple[StatementBatch, Dict[str, Any]]:
        batch = FunctionBuilder.create(options, known_schemas)
        schema, name = FunctionBuilder.target(options, known_schemas)
        return batch, {"name": name, "schema": schema}


__all__ = ["FunctionResource"]
