# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Infrastructure - Shared resource orchestration
# PURPOSE: Base classes for catalog resources
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Infrastructure module.

Provides:
- CatalogReader: list/retrieve over one catalog query
- MetaResource: CatalogReader plus create/update/remove via a DDL builder
- ResourceError: abort statement composition with a MetaError
"""

from infrastructure.base_repository import (
    CatalogReader,
    MetaResource,
    ResourceError,
)

__all__ = [
    'CatalogReader',
    'MetaResource',
    'ResourceError',
]
