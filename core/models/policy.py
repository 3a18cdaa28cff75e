# ============================================================================
# POLICY MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain model - Row level security policies
# PURPOSE: Catalog record and option sets for policies
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Policy Model

Row level security policies on a single table. ``definition`` is the USING
expression and ``check`` the WITH CHECK expression.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.contracts import PolicyAction, PolicyCommand
from core.models.base import SchemaScoped


class Policy(SchemaScoped):
    """Policy as reported by pg_policy."""
    id: int
    table: str
    table_id: int
    name: str
    action: PolicyAction = PolicyAction.PERMISSIVE
    roles: List[str] = Field(default_factory=list)
    command: PolicyCommand = PolicyCommand.ALL
    definition: Optional[str] = None
    check: Optional[str] = None

    @field_validator("roles", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return v or []


class PolicyCreate(BaseModel):
    name: Optional[str] = None
    table: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    definition: Optional[str] = None
    check: Optional[str] = None
    action: PolicyAction = PolicyAction.PERMISSIVE
    command: PolicyCommand = PolicyCommand.ALL
    roles: List[str] = Field(default_factory=lambda: ["public"])

    model_config = {"populate_by_name": True}


class PolicyUpdate(BaseModel):
    name: Optional[str] = None
    definition: Optional[str] = None
    check: Optional[str] = None
    roles: Optional[List[str]] = None


__all__ = ["Policy", "PolicyCreate", "PolicyUpdate"]
