# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain models - Catalog records and option sets
# PURPOSE: Export pydantic models for every catalog resource
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================

from core.models.base import SchemaScoped
from core.models.schema import Schema, SchemaCreate, SchemaUpdate
from core.models.table import (
    Column,
    ColumnCreate,
    ColumnUpdate,
    Table,
    TableCreate,
    TableUpdate,
)
from core.models.trigger import Trigger, TriggerCreate, TriggerUpdate
from core.models.function import Function, FunctionCreate, FunctionUpdate
from core.models.policy import Policy, PolicyCreate, PolicyUpdate
from core.models.pg_type import PgType

__all__ = [
    "SchemaScoped",
    # Schemas
    "Schema",
    "SchemaCreate",
    "SchemaUpdate",
    # Tables & columns
    "Table",
    "TableCreate",
    "TableUpdate",
    "Column",
    "ColumnCreate",
    "ColumnUpdate",
    # Triggers
    "Trigger",
    "TriggerCreate",
    "TriggerUpdate",
    # Functions
    "Function",
    "FunctionCreate",
    "FunctionUpdate",
    # Policies
    "Policy",
    "PolicyCreate",
    "PolicyUpdate",
    # Types
    "PgType",
]
