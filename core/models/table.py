# ============================================================================
# TABLE & COLUMN MODELS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain model - Tables and their columns
# PURPOSE: Catalog records and option sets for tables and columns
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Table & Column Models

Tables own an ordered list of columns. Column ids are composite strings,
"<table_id>.<ordinal_position>", matching how the catalog addresses them
(attrelid + attnum).

Column.format is the catalog type name (pg_type.typname, e.g. "int8",
"_text", "user_status") and is what type projection resolves.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.contracts import DefaultValueFormat, IdentityGeneration, ReplicaIdentity
from core.models.base import SchemaScoped


class Column(SchemaScoped):
    """Column as reported by pg_attribute."""
    id: str
    table_id: int
    table: str
    name: str
    ordinal_position: int
    data_type: str
    format: str
    default_value: Optional[str] = None
    is_identity: bool = False
    identity_generation: Optional[IdentityGeneration] = None
    is_generated: bool = False
    is_nullable: bool = True
    is_updatable: bool = True
    is_unique: bool = False
    enums: List[str] = Field(default_factory=list)
    check: Optional[str] = None
    comment: Optional[str] = None

    @field_validator("enums", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return v or []


class Table(SchemaScoped):
    """Ordinary or partitioned table as reported by pg_class."""
    id: int
    name: str
    rls_enabled: bool = False
    rls_forced: bool = False
    replica_identity: ReplicaIdentity = ReplicaIdentity.DEFAULT
    bytes: int = 0
    size: Optional[str] = None
    live_rows_estimate: int = 0
    dead_rows_estimate: int = 0
    comment: Optional[str] = None
    primary_keys: List[str] = Field(default_factory=list)
    columns: List[Column] = Field(default_factory=list)

    @field_validator("primary_keys", "columns", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return v or []


class TableCreate(BaseModel):
    name: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    comment: Optional[str] = None

    model_config = {"populate_by_name": True}


class TableUpdate(BaseModel):
    name: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    rls_enabled: Optional[bool] = None
    rls_forced: Optional[bool] = None
    replica_identity: Optional[ReplicaIdentity] = None
    replica_identity_index: Optional[str] = None
    primary_keys: Optional[List[str]] = None
    comment: Optional[str] = None

    model_config = {"populate_by_name": True}


class ColumnCreate(BaseModel):
    """Options for ALTER TABLE ... ADD COLUMN."""
    table_id: Optional[int] = None
    name: Optional[str] = None
    type: Optional[str] = Field(
        default=None,
        description="Type name, may be schema-qualified and end in []",
    )
    default_value: Optional[Any] = None
    default_value_format: DefaultValueFormat = DefaultValueFormat.LITERAL
    is_identity: bool = False
    identity_generation: Optional[IdentityGeneration] = None
    is_nullable: Optional[bool] = None
    is_primary_key: bool = False
    is_unique: bool = False
    comment: Optional[str] = None
    check: Optional[str] = None


class ColumnUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    drop_default: bool = False
    default_value: Optional[Any] = None
    default_value_format: DefaultValueFormat = DefaultValueFormat.LITERAL
    is_identity: Optional[bool] = None
    identity_generation: Optional[IdentityGeneration] = None
    is_nullable: Optional[bool] = None
    is_unique: Optional[bool] = None
    comment: Optional[str] = None
    check: Optional[str] = None


__all__ = [
    "Column",
    "Table",
    "TableCreate",
    "TableUpdate",
    "ColumnCreate",
    "ColumnUpdate",
]
