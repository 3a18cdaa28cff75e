# ============================================================================
# TYPEGEN MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Type projection
# PURPOSE: Catalog snapshot, projected types, projector and renderer
# CREATED: 16 OCT 2026
# ============================================================================

from core.typegen.catalog import TypeCatalog
from core.typegen.types import (
    ArrayOf,
    EmptyMap,
    JsonValue,
    LiteralUnion,
    Nullable,
    OpenMap,
    Scalar,
    TsType,
    Unknown,
    render_type,
)
from core.typegen.projector import (
    DatabaseBindings,
    FieldBinding,
    FunctionBindings,
    SchemaBindings,
    TableBindings,
    TypeProjector,
)
from core.typegen.render import render_typescript

__all__ = [
    "TypeCatalog",
    "TypeProjector",
    "DatabaseBindings",
    "SchemaBindings",
    "TableBindings",
    "FunctionBindings",
    "FieldBinding",
    "TsType",
    "Scalar",
    "ArrayOf",
    "LiteralUnion",
    "Nullable",
    "JsonValue",
    "OpenMap",
    "EmptyMap",
    "Unknown",
    "render_type",
    "render_typescript",
]
