# ============================================================================
# PROJECTED TYPE VARIANTS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Target type system values
# PURPOSE: Small recursive variant type produced by the projector
# CREATED: 16 OCT 2026
# ============================================================================
"""
Projected Type Variants

The projector maps catalog types onto these values; the renderer turns them
into TypeScript. Keeping them structural (instead of concatenating strings)
lets nesting like arrays of arrays or nullable arrays render correctly.

    Scalar("number")                  -> number
    ArrayOf(Scalar("string"))         -> string[]
    LiteralUnion(("a", "b"))          -> "a" | "b"
    Nullable(Scalar("number"))        -> number | null
    JsonValue()                       -> Json
    OpenMap()                         -> Record<string, unknown>
    EmptyMap()                        -> Record<PropertyKey, never>
    Unknown()                         -> unknown
"""

import json
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Scalar:
    name: str


@dataclass(frozen=True)
class ArrayOf:
    element: "TsType"


@dataclass(frozen=True)
class LiteralUnion:
    labels: Tuple[str, ...]


@dataclass(frozen=True)
class Nullable:
    inner: "TsType"


@dataclass(frozen=True)
class JsonValue:
    pass


@dataclass(frozen=True)
class OpenMap:
    pass


@dataclass(frozen=True)
class EmptyMap:
    pass


@dataclass(frozen=True)
class Unknown:
    pass


TsType = Union[Scalar, ArrayOf, LiteralUnion, Nullable, JsonValue, OpenMap, EmptyMap, Unknown]

BOOLEAN = Scalar("boolean")
NUMBER = Scalar("number")
STRING = Scalar("string")
UNDEFINED = Scalar("undefined")
UNKNOWN = Unknown()
JSON = JsonValue()
OPEN_MAP = OpenMap()
EMPTY_MAP = EmptyMap()

JSON_TYPE_NAME = "Json"


def render_type(t: TsType) -> str:
    """Render a projected type as a TypeScript type expression."""
    if isinstance(t, Scalar):
        return t.name
    if isinstance(t, ArrayOf):
        inner = render_type(t.element)
        # Unions bind looser than [], so they need parentheses
        if isinstance(t.element, (LiteralUnion, Nullable)) and " | " in inner:
            inner = f"({inner})"
        return inner + "[]"
    if isinstance(t, LiteralUnion):
        return " | ".join(json.dumps(label) for label in t.labels)
    if isinstance(t, Nullable):
        return f"{render_type(t.inner)} | null"
    if isinstance(t, JsonValue):
        return JSON_TYPE_NAME
    if isinstance(t, OpenMap):
        return "Record<string, unknown>"
    if isinstance(t, EmptyMap):
        return "Record<PropertyKey, never>"
    return "unknown"


__all__ = [
    "Scalar",
    "ArrayOf",
    "LiteralUnion",
    "Nullable",
    "JsonValue",
    "OpenMap",
    "EmptyMap",
    "Unknown",
    "TsType",
    "BOOLEAN",
    "NUMBER",
    "STRING",
    "UNDEFINED",
    "UNKNOWN",
    "JSON",
    "OPEN_MAP",
    "EMPTY_MAP",
    "JSON_TYPE_NAME",
    "render_type",
]
