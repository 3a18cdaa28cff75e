# ============================================================================
# SCHEMA REPOSITORY
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Schema (namespace) resource
# PURPOSE: List, retrieve, create, update and drop schemas
# CREATED: 16 OCT 2026
# ============================================================================
"""
Schema Repository

Also the schema-listing collaborator for every other resource: its list()
provides the schema names that qualified-name resolution runs against.
"""

from typing import Any, Dict, List, Tuple

from core.models.schema import Schema, SchemaCreate, SchemaUpdate
from core.schema.schema_ddl import SchemaBuilder
from core.schema.statements import StatementBatch
from infrastructure.base_repository import MetaResource
from repositories.catalog_sql import SCHEMAS_SQL
from repositories.executor import QueryExecutor


class SchemaResource(MetaResource[Schema, SchemaCreate, SchemaUpdate]):
    """Resource for schemas."""

    kind = "schema"
    alias = "schemas"
    list_sql = SCHEMAS_SQL
    model = Schema
    create_model = SchemaCreate
    update_model = SchemaUpdate
    builder = SchemaBuilder
    schema_column = "name"
    natural_key = ("name",)
    optional_key = ()

    def __init__(self, executor: QueryExecutor):
        # Lists its own rows as the schema names
        super().__init__(executor, schemas=self)

    async def _compose_create(
        self,
        options: SchemaCreate,
        known_schemas: List[str],
    ) -> Tuple[StatementBatch, Dict[str, Any]]:
        return SchemaBuilder.create(options, known_schemas), {"name": options.name}


__all__ = ["SchemaResource"]
