# ============================================================================
# TYPE PROJECTOR
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Catalog to TypeScript type projection
# PURPOSE: Pure translation of a TypeCatalog snapshot into type bindings
# CREATED: 16 OCT 2026
# ============================================================================
"""
Type Projector

Pure function of a TypeCatalog snapshot: no I/O, no shared state. Every
catalog type resolves by these rules, first match wins:

    1. bool                                   -> boolean
    2. int2 int4 int8 float4 float8 numeric   -> number
    3. bytea bpchar varchar date text time
       timetz timestamp timestamptz uuid      -> string
    4. json jsonb                             -> Json
    5. void                                   -> undefined
       record                                 -> Record<string, unknown>[]
    6. leading "_"                            -> array of the rest
    7. enum with that exact name              -> union of its labels
       anything else                          -> unknown

Array detection strips one leading underscore without checking that the
type really is an array, and enum lookup ignores schemas. Both are known
limitations and kept as-is.

Usage:
    projector = TypeProjector(excluded_schemas=["pg_catalog"])
    bindings = projector.project(catalog)
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from core.contracts import IdentityGeneration
from core.models.function import Function
from core.models.table import Column, Table
from core.typegen.catalog import TypeCatalog
from core.typegen.types import (
    ArrayOf,
    BOOLEAN,
    EMPTY_MAP,
    JSON,
    LiteralUnion,
    Nullable,
    NUMBER,
    OPEN_MAP,
    STRING,
    TsType,
    UNDEFINED,
    UNKNOWN,
)

BOOLEAN_TYPES = frozenset({"bool"})
NUMBER_TYPES = frozenset({"int2", "int4", "int8", "float4", "float8", "numeric"})
STRING_TYPES = frozenset({
    "bytea", "bpchar", "varchar", "date", "text",
    "time", "timetz", "timestamp", "timestamptz", "uuid",
})
JSON_TYPES = frozenset({"json", "jsonb"})
ARRAY_PREFIX = "_"
TRIGGER_RETURN_TYPE = "trigger"

DEFAULT_MAX_DEPTH = 8


# ============================================================================
# BINDINGS
# ============================================================================

@dataclass(frozen=True)
class FieldBinding:
    name: str
    type: TsType
    optional: bool = False


@dataclass(frozen=True)
class TableBindings:
    name: str
    row: Tuple[FieldBinding, ...]
    insert: Tuple[FieldBinding, ...]
    update: Tuple[FieldBinding, ...]


# Args are either a precise per-argument shape or a single map type
FunctionArgs = Union[TsType, Tuple[FieldBinding, ...]]


@dataclass(frozen=True)
class FunctionBindings:
    name: str
    args: FunctionArgs
    returns: TsType


@dataclass(frozen=True)
class SchemaBindings:
    name: str
    tables: Tuple[TableBindings, ...] = ()
    functions: Tuple[FunctionBindings, ...] = ()


@dataclass(frozen=True)
class DatabaseBindings:
    schemas: Tuple[SchemaBindings, ...] = field(default_factory=tuple)


# ============================================================================
# PROJECTOR
# ============================================================================

class TypeProjector:
    """Projects a catalog snapshot onto TypeScript type bindings."""

    def __init__(
        self,
        included_schemas: Optional[Iterable[str]] = None,
        excluded_schemas: Optional[Iterable[str]] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.included_schemas = list(included_schemas or [])
        self.excluded_schemas = list(excluded_schemas or [])
        self.max_depth = max_depth

    # ------------------------------------------------------------------
    # Scalar types
    # ------------------------------------------------------------------

    def project_type(self, type_name: str, catalog: TypeCatalog, depth: int = 0) -> TsType:
        if depth > self.max_depth:
            return UNKNOWN

        if type_name in BOOLEAN_TYPES:
            return BOOLEAN
        if type_name in NUMBER_TYPES:
            return NUMBER
        if type_name in STRING_TYPES:
            return STRING
        if type_name in JSON_TYPES:
            return JSON
        if type_name == "void":
            return UNDEFINED
        if type_name == "record":
            return ArrayOf(OPEN_MAP)
        if type_name.startswith(ARRAY_PREFIX):
            return ArrayOf(self.project_type(type_name[len(ARRAY_PREFIX):], catalog, depth + 1))

        labels = catalog.enum_labels(type_name)
        if labels:
            return LiteralUnion(tuple(labels))
        return UNKNOWN

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _column_type(self, column: Column, catalog: TypeCatalog) -> TsType:
        projected = self.project_type(column.format, catalog)
        return Nullable(projected) if column.is_nullable else projected

    def project_table(self, table: Table, catalog: TypeCatalog) -> TableBindings:
        row: List[FieldBinding] = []
        insert: List[FieldBinding] = []
        update: List[FieldBinding] = []

        for column in table.columns:
            ts_type = self._column_type(column, catalog)
            row.append(FieldBinding(column.name, ts_type))
            update.append(FieldBinding(column.name, ts_type, optional=True))

            if column.identity_generation == IdentityGeneration.ALWAYS:
                continue
            optional = (
                column.is_nullable
                or column.is_identity
                or column.default_value is not None
            )
            insert.append(FieldBinding(column.name, ts_type, optional=optional))

        return TableBindings(
            name=table.name,
            row=tuple(row),
            insert=tuple(insert),
            update=tuple(update),
        )

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def project_args(self, argument_types: str, catalog: TypeCatalog) -> FunctionArgs:
        """
        Shape of a function's arguments from its pg_get_function_arguments() text.

        Each argument must look like "name type". A quoted identifier or an
        unnamed argument makes per-argument parsing unreliable, so the whole
        shape falls back to an open map.
        """
        if argument_types == "":
            return EMPTY_MAP

        args = [arg.strip() for arg in argument_types.split(",")]
        if any('"' in arg or " " not in arg for arg in args):
            return OPEN_MAP

        fields: List[FieldBinding] = []
        for arg in args:
            name, _, type_format = arg.partition(" ")
            pg_type = catalog.type_by_format(type_format)
            if pg_type is None:
                fields.append(FieldBinding(name, UNKNOWN))
            else:
                fields.append(FieldBinding(name, self.project_type(pg_type.name, catalog)))
        return tuple(fields)

    def project_function(self, function: Function, catalog: TypeCatalog) -> FunctionBindings:
        return FunctionBindings(
            name=function.name,
            args=self.project_args(function.argument_types, catalog),
            returns=self.project_type(function.return_type, catalog),
        )

    # ------------------------------------------------------------------
    # Whole catalog
    # ------------------------------------------------------------------

    def includes_schema(self, name: str) -> bool:
        if self.included_schemas and name not in self.included_schemas:
            return False
        return name not in self.excluded_schemas

    def project_schema(self, schema_name: str, catalog: TypeCatalog) -> SchemaBindings:
        tables = tuple(self.project_table(t, catalog) for t in catalog.tables_in(schema_name))

        functions: List[FunctionBindings] = []
        seen = set()
        for function in catalog.functions_in(schema_name):
            if function.return_type == TRIGGER_RETURN_TYPE:
                continue
            # Overloads share a name; the first one listed wins
            if function.name in seen:
                continue
            seen.add(function.name)
            functions.append(self.project_function(function, catalog))

        return SchemaBindings(name=schema_name, tables=tables, functions=tuple(functions))

    def project(self, catalog: TypeCatalog) -> DatabaseBindings:
        return DatabaseBindings(schemas=tuple(
            self.project_schema(schema.name, catalog)
            for schema in catalog.schemas
            if self.includes_schema(schema.name)
        ))


__all__ = [
    "TypeProjector",
    "FieldBinding",
    "TableBindings",
    "FunctionBindings",
    "FunctionArgs",
    "SchemaBindings",
    "DatabaseBindings",
    "DEFAULT_MAX_DEPTH",
]
