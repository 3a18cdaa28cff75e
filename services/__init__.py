# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Service layer
# PURPOSE: Resource facade and type generation
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Services Module

Usage:
    from services import PostgresMeta, TypegenService

    meta = PostgresMeta.from_pool(pool)
    types = await TypegenService(meta).generate_typescript()
"""

from .meta_service import PostgresMeta
from .typegen_service import TypegenService

__all__ = [
    "PostgresMeta",
    "TypegenService",
]
