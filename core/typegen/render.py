# ============================================================================
# TYPESCRIPT RENDERER
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Text output for projected bindings
# PURPOSE: Emit one TypeScript document from DatabaseBindings
# CREATED: 16 OCT 2026
# ============================================================================
"""
TypeScript Renderer

Output layout:

    export type Json = ...

    export interface Database {
      public: {
        Tables: { <table>: { Row: {...}, Insert: {...}, Update: {...} } }
        Functions: { <fn>: { Args: ..., Returns: ... } }
      }
    }
"""

import json
from typing import List, Sequence

from core.typegen.projector import (
    DatabaseBindings,
    FieldBinding,
    FunctionArgs,
    FunctionBindings,
    SchemaBindings,
    TableBindings,
)
from core.typegen.types import JSON_TYPE_NAME, render_type

INDENT = "  "

JSON_DECLARATION = (
    f"export type {JSON_TYPE_NAME} =\n"
    f"{INDENT}| string\n"
    f"{INDENT}| number\n"
    f"{INDENT}| boolean\n"
    f"{INDENT}| null\n"
    f"{INDENT}| {{ [key: string]: {JSON_TYPE_NAME} }}\n"
    f"{INDENT}| {JSON_TYPE_NAME}[]"
)


def _key(name: str) -> str:
    return json.dumps(name)


def _fields(fields: Sequence[FieldBinding], level: int) -> List[str]:
    pad = INDENT * level
    return [
        f"{pad}{_key(f.name)}{'?' if f.optional else ''}: {render_type(f.type)}"
        for f in fields
    ]


def _object(name: str, fields: Sequence[FieldBinding], level: int) -> List[str]:
    pad = INDENT * level
    if not fields:
        return [f"{pad}{name}: {{}}"]
    return [f"{pad}{name}: {{", *_fields(fields, level + 1), f"{pad}}}"]


def _table(table: TableBindings, level: int) -> List[str]:
    pad = INDENT * level
    return [
        f"{pad}{_key(table.name)}: {{",
        *_object("Row", table.row, level + 1),
        *_object("Insert", table.insert, level + 1),
        *_object("Update", table.update, level + 1),
        f"{pad}}}",
    ]


def _args(args: FunctionArgs, level: int) -> List[str]:
    if isinstance(args, tuple):
        return _object("Args", args, level)
    return [f"{INDENT * level}Args: {render_type(args)}"]


def _function(function: FunctionBindings, level: int) -> List[str]:
    pad = INDENT * level
    return [
        f"{pad}{_key(function.name)}: {{",
        *_args(function.args, level + 1),
        f"{pad}{INDENT}Returns: {render_type(function.returns)}",
        f"{pad}}}",
    ]


def _schema(schema: SchemaBindings, level: int) -> List[str]:
    pad = INDENT * level
    inner = INDENT * (level + 1)
    lines = [f"{pad}{_key(schema.name)}: {{", f"{inner}Tables: {{"]
    for table in schema.tables:
        lines.extend(_table(table, level + 2))
    lines.append(f"{inner}}}")
    lines.append(f"{inner}Functions: {{")
    for function in schema.functions:
        lines.extend(_function(function, level + 2))
    lines.append(f"{inner}}}")
    lines.append(f"{pad}}}")
    return lines


def render_typescript(bindings: DatabaseBindings) -> str:
    """Render the whole binding document, ending with a newline."""
    lines = [JSON_DECLARATION, "", "export interface Database {"]
    for schema in bindings.schemas:
        lines.extend(_schema(schema, 1))
    lines.append("}")
    return "\n".join(lines) + "\n"


__all__ = ["render_typescript", "JSON_DECLARATION"]
