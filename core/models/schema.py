# ============================================================================
# SCHEMA MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain model - Database schemas (namespaces)
# PURPOSE: Catalog record and option sets for schemas
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Schema Model

A schema is identified by its name. The list of schema names is also what
drives qualified-name resolution when other resources are created.
"""

from typing import Optional

from pydantic import BaseModel


class Schema(BaseModel):
    """Namespace as reported by pg_namespace."""
    id: int
    name: str
    owner: str


class SchemaCreate(BaseModel):
    name: Optional[str] = None
    owner: Optional[str] = None


class SchemaUpdate(BaseModel):
    name: Optional[str] = None
    owner: Optional[str] = None


__all__ = ["Schema", "SchemaCreate", "SchemaUpdate"]
