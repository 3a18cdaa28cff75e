# ============================================================================
# MODEL BASE CLASSES
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain model - Shared base for catalog records
# PURPOSE: Common config for models that carry a schema column
# CREATED: 16 OCT 2026
# ============================================================================
"""
Catalog records that live inside a schema expose it as ``schema`` on the
wire. ``schema`` is also an attribute of pydantic's BaseModel, so the field
is stored as ``schema_name`` with ``schema`` as its alias; serialize with
``model_dump(by_alias=True)``.
"""

from pydantic import BaseModel, Field


class SchemaScoped(BaseModel):
    """Base for catalog records that belong to a schema."""
    schema_name: str = Field(..., alias="schema")

    model_config = {"populate_by_name": True}

    @property
    def schema(self) -> str:
        return self.schema_name


__all__ = ["SchemaScoped"]
