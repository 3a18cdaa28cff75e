# ============================================================================
# TYPEGEN SERVICE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Domain service - TypeScript type generation
# PURPOSE: Fetch a fresh catalog snapshot, project it and render TypeScript
# CREATED: 16 OCT 2026
# ============================================================================
"""
TypegenService

Each call fetches schemas, tables (with columns), functions and types, then
runs the pure projector over that snapshot. Nothing is cached between
calls. A failed fetch is returned as-is; projection itself cannot fail.

Usage:
    service = TypegenService(meta)
    result = await service.generate_typescript(excluded_schemas=["auth"])
    print(result.unwrap())
"""

from typing import Iterable, Optional

from core.config import get_defaults
from core.logging import ComponentType, get_logger, log_context
from core.results import MetaResult
from core.typegen import TypeCatalog, TypeProjector, render_typescript
from services.meta_service import PostgresMeta

logger = get_logger(__name__, ComponentType.TYPEGEN)


class TypegenService:
    """Generates TypeScript bindings for the connected database."""

    def __init__(self, meta: PostgresMeta):
        self.meta = meta

    async def fetch_catalog(self) -> MetaResult[TypeCatalog]:
        """Fetch the four catalog collections the projector needs."""
        schemas = await self.meta.schemas.list()
        if not schemas.ok:
            return schemas
        tables = await self.meta.tables.list()
        if not tables.ok:
            return tables
        functions = await self.meta.functions.list()
        if not functions.ok:
            return functions
        # System types (int4, text, ...) are needed to resolve function args
        types = await self.meta.types.list(include_system_schemas=True)
        if not types.ok:
            return types

        return MetaResult.success(TypeCatalog.build(
            schemas=schemas.data,
            tables=tables.data,
            functions=functions.data,
            types=types.data,
        ))

    def projector(
        self,
        included_schemas: Optional[Iterable[str]] = None,
        excluded_schemas: Optional[Iterable[str]] = None,
    ) -> TypeProjector:
        defaults = get_defaults().typegen
        return TypeProjector(
            included_schemas=included_schemas if included_schemas else defaults.included_schemas,
            excluded_schemas=excluded_schemas if excluded_schemas else defaults.excluded_schemas,
            max_depth=defaults.max_depth,
        )

    async def generate_typescript(
        self,
        included_schemas: Optional[Iterable[str]] = None,
        excluded_schemas: Optional[Iterable[str]] = None,
    ) -> MetaResult[str]:
        with log_context(resource="typescript", operation="generate"):
            catalog = await self.fetch_catalog()
            if not catalog.ok:
                logger.warning(f"Catalog fetch failed: {catalog.error.message}")
                return catalog

            bindings = self.projector(included_schemas, excluded_schemas).project(catalog.data)
            logger.info(
                "Generated TypeScript types",
                extra={"schemas": len(bindings.schemas)},
            )
            return MetaResult.success(render_typescript(bindings))


__all__ = ["TypegenService"]
