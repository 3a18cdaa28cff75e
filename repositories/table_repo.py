# ============================================================================
# TABLE REPOSITORY
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Table resource
# PURPOSE: List, retrieve, create, update and drop tables with their columns
# CREATED: 16 OCT 2026
# ============================================================================
"""
Table Repository

Tables are returned with their columns attached, ordered by position. The
columns of every table in one result are fetched with a single extra query.
"""

from collections import defaultdict
from typing import Any, Dict, List, Tuple

from core.models.table import Column, Table, TableCreate, TableUpdate
from core.results import MetaResult
from core.schema.statements import StatementBatch
from core.schema.table_ddl import TableBuilder
from infrastructure.base_repository import MetaResource
from repositories.catalog_sql import COLUMNS_SQL, TABLES_SQL, build_select


class TableResource(MetaResource[Table, TableCreate, TableUpdate]):
    """Resource for tables."""

    kind = "table"
    alias = "tables"
    list_sql = TABLES_SQL
    model = Table
    create_model = TableCreate
    update_model = TableUpdate
    builder = TableBuilder
    natural_key = ("name",)
    optional_key = ("schema",)
    key_defaults = {"schema": "public"}

    async def _load(self, rows: List[Dict[str, Any]]) -> MetaResult[List[Table]]:
        tables = [Table.model_validate(row) for row in rows]
        if not tables:
            return MetaResult.success(tables)

        query, params = build_select(
            COLUMNS_SQL,
            "columns",
            any_of={"table_id": [table.id for table in tables]},
        )
        result = await self.executor.query(query, params)
        if not result.ok:
            return result

        by_table: Dict[int, List[Column]] = defaultdict(list)
        for row in result.data:
            column = Column.model_validate(row)
            by_table[column.table_id].append(column)

        for table in tables:
            table.columns = sorted(by_table.get(table.id, []), key=lambda c: c.ordinal_position)
        return MetaResult.success(tables)

    async def _compose_create(
        self,
        options: TableCreate,
        known_schemas: List[str],
    ) -> Tuple[StatementBatch, Dict[str, Any]]:
        batch = TableBuilder.create(options, known_schemas)
        schema, name = TableBuilder.target(options, known_schemas)
        return batch, {"name": name, "schema": schema}


__all__ = ["TableResource"]
