# ============================================================================
# QUALIFIED NAME RESOLUTION
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Schema-aware dotted name splitting
# PURPOSE: Split "schema.name" strings against the live list of schemas
# CREATED: 16 OCT 2026
# ============================================================================
"""
Qualified Name Resolution

Names supplied by callers may or may not carry a schema prefix, and schema
names may themselves contain dots. A name is only treated as qualified when
it starts with a *known* schema followed by '.'; the longest matching schema
wins so "app.v2" is never shadowed by "app".

The schema list is always passed in by the caller (fetched fresh for each
create), never cached here.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from psycopg import sql

from core.schema.quoting import as_text, identifier


@dataclass(frozen=True)
class QualifiedName:
    """A resolved (schema?, name) pair."""
    name: str
    schema: Optional[str] = None

    @classmethod
    def from_parts(cls, parts: List[str]) -> "QualifiedName":
        if len(parts) == 2:
            return cls(name=parts[1], schema=parts[0])
        return cls(name=parts[0])

    @property
    def parts(self) -> List[str]:
        if self.schema is not None:
            return [self.schema, self.name]
        return [self.name]

    def identifier(self) -> sql.Identifier:
        return identifier(*self.parts)


def split_qualified_name(known_schemas: Iterable[str], name: str) -> List[str]:
    """
    Split a possibly schema-qualified name.

    Args:
        known_schemas: Schema names that currently exist
        name: Caller-supplied name, e.g. "public.users" or "users"

    Returns:
        [schema, bare_name] when name starts with a known schema plus '.',
        otherwise [name]
    """
    # sorted() is stable, so equal-length schemas keep their original order
    for schema in sorted(known_schemas, key=len, reverse=True):
        if name.startswith(schema + "."):
            return [schema, name[len(schema) + 1:]]
    return [name]


def resolve_qualified(known_schemas: Iterable[str], name: str) -> QualifiedName:
    """split_qualified_name() wrapped in a QualifiedName."""
    return QualifiedName.from_parts(split_qualified_name(known_schemas, name))


def resolved_identifier(known_schemas: Iterable[str], name: str) -> sql.Identifier:
    """Resolve a name into a (possibly dotted) identifier."""
    return identifier(*split_qualified_name(known_schemas, name))


def quote_resolved(known_schemas: Iterable[str], name: str) -> str:
    """Resolve a name and quote each segment."""
    return as_text(resolved_identifier(known_schemas, name))


__all__ = [
    "QualifiedName",
    "split_qualified_name",
    "resolve_qualified",
    "resolved_identifier",
    "quote_resolved",
]
