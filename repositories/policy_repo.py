# ============================================================================
# POLICY REPOSITORY
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Row level security policy resource
# PURPOSE: List, retrieve, create, update and drop policies
# CREATED: 16 OCT 2026
# ============================================================================
"""Policy Repository"""

from typing import Any, Dict, List, Tuple

from core.models.policy import Policy, PolicyCreate, PolicyUpdate
from core.schema.policy_ddl import PolicyBuilder
from core.schema.statements import StatementBatch
from infrastructure.base_repository import MetaResource
from repositories.catalog_sql import POLICIES_SQL


class PolicyResource(MetaResource[Policy, PolicyCreate, PolicyUpdate]):
    """Resource for policies."""

    kind = "policy"
    alias = "policies"
    list_sql = POLICIES_SQL
    model = Policy
    create_model = PolicyCreate
    update_model = PolicyUpdate
    builder = PolicyBuilder
    natural_key = ("name", "table")
    optional_key = ("schema",)

    async def _compose_create(
        self,
        options: PolicyCreate,
        known_schemas: List[str],
    ) -> Tuple[StatementBatch, Dict[str, Any]]:
        batch = PolicyBuilder.create(options, known_schemas)
        schema, table = PolicyBuilder.target(options, known_schemas)
        return batch, {"name": options.name, "table": table, "schema": schema}


__all__ = ["PolicyResource"]
