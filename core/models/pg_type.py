# ============================================================================
# TYPE MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain model - Catalog data types
# PURPOSE: Read-only record for pg_type entries
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Type Model

``name`` is the catalog name (typname: "int4", "_text", "user_status") and
``format`` the display form (format_type(): "integer", "text[]",
"user_status"). Function argument strings use the display form, columns and
return types use the catalog name, so type projection needs both.
``enums`` lists the labels of an enum type in sort order, empty otherwise.
"""

from typing import Any, List, Optional

from pydantic import Field, field_validator

from core.models.base import SchemaScoped


class PgType(SchemaScoped):
    id: int
    name: str
    format: str
    enums: List[str] = Field(default_factory=list)
    comment: Optional[str] = None

    @field_validator("enums", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return v or []


__all__ = ["PgType"]
