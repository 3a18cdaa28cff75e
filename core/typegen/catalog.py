# ============================================================================
# TYPE CATALOG SNAPSHOT
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Read-only input to type projection
# PURPOSE: Hold one fetched snapshot of schemas, tables, functions and types
# CREATED: 16 OCT 2026
# ============================================================================
"""
Type Catalog Snapshot

Four cross-referenced collections fetched together for one projection run.
The snapshot is immutable and not cached between runs.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from core.models.function import Function
from core.models.pg_type import PgType
from core.models.schema import Schema
from core.models.table import Table


@dataclass(frozen=True)
class TypeCatalog:
    schemas: Tuple[Schema, ...] = ()
    tables: Tuple[Table, ...] = ()
    functions: Tuple[Function, ...] = ()
    types: Tuple[PgType, ...] = ()
    _by_format: Dict[str, PgType] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        index: Dict[str, PgType] = {}
        for pg_type in self.types:
            # First match wins, like a linear scan over the type list
            index.setdefault(pg_type.format, pg_type)
        object.__setattr__(self, "_by_format", index)

    @classmethod
    def build(
        cls,
        schemas: Iterable[Schema],
        tables: Iterable[Table],
        functions: Iterable[Function],
        types: Iterable[PgType],
    ) -> "TypeCatalog":
        return cls(
            schemas=tuple(schemas),
            tables=tuple(tables),
            functions=tuple(functions),
            types=tuple(types),
        )

    def type_by_format(self, fmt: str) -> Optional[PgType]:
        return self._by_format.get(fmt)

    def enum_labels(self, name: str) -> List[str]:
        """
        Labels of the first enum type whose catalog name is exactly ``name``.

        Matching ignores schemas, so two schemas defining an enum with the
        same name resolve to whichever comes first in the snapshot.
        """
        for pg_type in self.types:
            if pg_type.name == name and pg_type.enums:
                return list(pg_type.enums)
        return []

    def tables_in(self, schema: str) -> List[Table]:
        return [t for t in self.tables if t.schema == schema]

    def functions_in(self, schema: str) -> List[Function]:
        return [f for f in self.functions if f.schema == schema]


__all__ = ["TypeCatalog"]
