# ============================================================================
# COLUMN REPOSITORY
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Column resource
# PURPOSE: List, retrieve, add, alter and drop table columns
# CREATED: 16 OCT 2026
# ============================================================================
"""
Column Repository

Column ids are "<table_id>.<ordinal_position>" strings. Creating a column
first looks up its table by table_id; a missing table is reported as
not-found before any DDL is built.
"""

from typing import Any, Dict, List, Optional, Tuple

from core.models.table import Column, ColumnCreate, ColumnUpdate
from core.schema.column_ddl import ColumnBuilder
from core.schema.statements import StatementBatch
from infrastructure.base_repository import CatalogReader, MetaResource, ResourceError
from repositories.catalog_sql import COLUMNS_SQL
from repositories.executor import QueryExecutor
from repositories.table_repo import TableResource


class ColumnResource(MetaResource[Column, ColumnCreate, ColumnUpdate]):
    """Resource for columns."""

    kind = "column"
    alias = "columns"
    list_sql = COLUMNS_SQL
    model = Column
    create_model = ColumnCreate
    update_model = ColumnUpdate
    builder = ColumnBuilder
    natural_key = ("table_id", "name")
    optional_key = ()
    id_type = str

    def __init__(
        self,
        executor: QueryExecutor,
        schemas: CatalogReader,
        tables: Optional[TableResource] = None,
    ):
        super().__init__(executor, schemas)
        self.tables = tables if tables is not None else TableResource(executor, schemas)

    async def _compose_create(
        self,
        options: ColumnCreate,
        known_schemas: List[str],
    ) -> Tuple[StatementBatch, Dict[str, Any]]:
        table = await self.tables.retrieve(id=options.table_id)
        if not table.ok:
            raise ResourceError(table.error)
        batch = ColumnBuilder.create(options, table.data, known_schemas)
        return batch, {"table_id": options.table_id, "name": options.name}

    async def _compose_update(self, current: Column, options: ColumnUpdate) -> StatementBatch:
        known: List[str] = []
        # Only a type change needs schema names, to resolve qualified type names
        if options.type:
            schemas = await self.known_schemas()
            if not schemas.ok:
                raise ResourceError(schemas.error)
            known = schemas.data
        return ColumnBuilder.update(current, options, known)


__all__ = ["ColumnResource"]
