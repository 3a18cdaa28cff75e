# ============================================================================
# TRIGGER MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain model - Table triggers
# PURPOSE: Catalog record and create/update option sets for triggers
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Trigger Model

A trigger is always scoped to exactly one schema-qualified table. The
catalog record (Trigger) is what retrieve() returns; TriggerCreate and
TriggerUpdate are the option sets accepted by create() and update().

Option sets keep every field optional: required-field checks happen in the
resource layer so the caller gets "Missing required param <name>" for the
first missing field rather than a list of pydantic errors.

Boolean flags accept 'true'/'false' strings and enum fields accept any
casing; both are decided here, at the boundary.
"""

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from core.contracts import (
    DeferrableMode,
    EnableMode,
    TriggerEnabledMode,
    TriggerOrientation,
    TriggerTiming,
)
from core.models.base import SchemaScoped


class Trigger(SchemaScoped):
    """
    Trigger as reported by pg_trigger.

    ``activation`` is the firing timing, ``events`` the list of
    INSERT/UPDATE/DELETE/TRUNCATE events it fires on.
    """
    id: int
    table_id: int
    enabled_mode: TriggerEnabledMode
    name: str
    table: str
    condition: Optional[str] = None
    orientation: TriggerOrientation
    activation: TriggerTiming
    events: List[str] = Field(default_factory=list)
    function_schema: str
    function_name: str
    function_args: List[str] = Field(default_factory=list)
    is_constraint: bool = False
    referenced_table: Optional[str] = None
    deferrable: bool = False
    initially_deferred: bool = False
    old_table: Optional[str] = None
    new_table: Optional[str] = None
    extension: Optional[str] = None
    is_extension_dependent: bool = False

    @field_validator("function_args", "events", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return v or []


def _split_csv(v: Any) -> Any:
    """Accept "a,b" as well as ["a", "b"]."""
    if isinstance(v, str):
        return [part.strip() for part in v.split(",") if part.strip()]
    return v


class TriggerCreate(BaseModel):
    """Options for creating a trigger."""
    name: Optional[str] = None
    table: Optional[str] = Field(
        default=None,
        description="Table, view or foreign table; may be schema-qualified",
    )
    function_name: Optional[str] = Field(
        default=None,
        description="Function to execute, e.g. 'public.audit_action'",
    )
    timing: Optional[TriggerTiming] = None
    event: Optional[str] = Field(
        default=None,
        description="'insert', 'update of col1, col2', 'insert or delete', ...",
    )
    orientation: Optional[TriggerOrientation] = None
    condition: Optional[str] = Field(
        default=None,
        description="Boolean expression, e.g. '(old.* is distinct from new.*)'",
    )
    transition_relation_reference: Optional[str] = Field(
        default=None,
        description="e.g. 'REFERENCING NEW TABLE AS newtab OLD TABLE AS oldtab'",
    )
    function_args: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("function_args", "function_arguments"),
    )
    constraint: bool = False
    referenced_table_name: Optional[str] = None
    deferrable: Optional[DeferrableMode] = Field(
        default=None,
        validation_alias=AliasChoices("deferrable", "default_timing"),
    )

    @field_validator("function_args", mode="before")
    @classmethod
    def _split_args(cls, v: Any) -> Any:
        if v is None:
            return []
        return _split_csv(v)


class TriggerUpdate(BaseModel):
    """
    Options for updating a trigger.

    Each supplied field produces its own ALTER statement; omitted fields
    leave the trigger untouched.
    """
    name: Optional[str] = None
    is_enabled: Optional[bool] = None
    enable_mode: Optional[EnableMode] = None
    extension: Optional[str] = None
    is_extension_dependent: Optional[bool] = None


__all__ = ["Trigger", "TriggerCreate", "TriggerUpdate"]
