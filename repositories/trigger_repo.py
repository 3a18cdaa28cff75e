# ============================================================================
# TRIGGER REPOSITORY
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Trigger resource
# PURPOSE: List, retrieve, create, update and drop table triggers
# CREATED: 16 OCT 2026
# ============================================================================
"""
Trigger Repository

Triggers are retrieved by id or by name + table (+ schema). After create,
the new trigger is looked up by its name and the table it was created on;
the schema filter only applies when the table name carried a known schema.

Usage:
    triggers = TriggerResource(executor, schemas=SchemaResource(executor))
    result = await triggers.create({
        "name": "audit",
        "table": "public.users",
        "function_name": "audit.log_change",
        "timing": "after",
        "event": "insert or update",
        "orientation": "row",
    })
"""

from typing import Any, Dict, List, Tuple

from core.models.trigger import Trigger, TriggerCreate, TriggerUpdate
from core.schema.names import resolve_qualified
from core.schema.statements import StatementBatch
from core.schema.trigger_ddl import TriggerBuilder
from infrastructure.base_repository import MetaResource
from repositories.catalog_sql import TRIGGERS_SQL


class TriggerResource(MetaResource[Trigger, TriggerCreate, TriggerUpdate]):
    """Resource for triggers."""

    kind = "trigger"
    alias = "triggers"
    list_sql = TRIGGERS_SQL
    model = Trigger
    create_model = TriggerCreate
    update_model = TriggerUpdate
    builder = TriggerBuilder
    natural_key = ("name", "table")
    optional_key = ("schema",)

    async def _compose_create(
        self,
        options: TriggerCreate,
        known_schemas: List[str],
    ) -> Tuple[StatementBatch, Dict[str, Any]]:
        batch = TriggerBuilder.create(options, known_schemas)
        table = resolve_qualified(known_schemas, options.table)
        return batch, {"name": options.name, "table": table.name, "schema": table.schema}


__all__ = ["TriggerResource"]
