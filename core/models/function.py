# ============================================================================
# FUNCTION MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain model - Stored functions
# PURPOSE: Catalog record and option sets for functions
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Function Model

``argument_types`` is the human-readable signature from
pg_get_function_arguments() ("a integer, b text DEFAULT 'x'"),
``identity_argument_types`` the form DROP/ALTER FUNCTION accept, and
``return_type`` the catalog name of the return type (pg_type.typname, so
"trigger", "void", "int4", "_text", ...).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.contracts import FunctionBehavior
from core.models.base import SchemaScoped


class Function(SchemaScoped):
    """Function as reported by pg_proc (aggregates and procedures excluded)."""
    id: int
    name: str
    language: str
    definition: Optional[str] = None
    argument_types: str = ""
    identity_argument_types: str = ""
    return_type: str
    result_type: Optional[str] = Field(
        default=None,
        description="Full RETURNS clause body, e.g. 'SETOF text' or 'TABLE(a integer)'",
    )
    behavior: FunctionBehavior = FunctionBehavior.VOLATILE
    security_definer: bool = False
    config_params: Optional[Dict[str, str]] = None
    owner: Optional[str] = None

    @field_validator("argument_types", "identity_argument_types", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return v or ""

    @property
    def is_trigger(self) -> bool:
        """Trigger functions are only invoked by triggers, never called directly."""
        return self.return_type == "trigger"


class FunctionCreate(BaseModel):
    """Options for CREATE FUNCTION."""
    name: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    args: List[str] = Field(
        default_factory=list,
        description="Argument declarations, e.g. ['a integer', 'b text']",
    )
    definition: Optional[str] = None
    return_type: str = "void"
    language: str = "sql"
    behavior: FunctionBehavior = FunctionBehavior.VOLATILE
    security_definer: bool = False
    config_params: Dict[str, str] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    @field_validator("args", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return v or []


class FunctionUpdate(BaseModel):
    name: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    definition: Optional[str] = None
    owner: Optional[str] = None

    model_config = {"populate_by_name": True}


__all__ = ["Function", "FunctionCreate", "FunctionUpdate"]
