# ============================================================================
# TYPE REPOSITORY
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Read-only data type listing
# PURPOSE: List and retrieve pg_type entries for type projection
# CREATED: 16 OCT 2026
# ============================================================================
"""Type Repository"""

from core.models.pg_type import PgType
from infrastructure.base_repository import CatalogReader
from repositories.catalog_sql import TYPES_SQL


class TypeResource(CatalogReader[PgType]):
    """Read-only resource for data types."""

    kind = "type"
    alias = "types"
    list_sql = TYPES_SQL
    model = PgType
    natural_key = ("name",)
    optional_key = ("schema",)


__all__ = ["TypeResource"]
