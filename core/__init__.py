# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core module initialization
# PURPOSE: Export contracts, result envelope and models
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================

from core.contracts import (
    TriggerTiming,
    TriggerOrientation,
    EnableMode,
    DeferrableMode,
)
from core.results import ErrorKind, MetaError, MetaResult, MetaResultError
from core.models import (
    Schema,
    Table,
    Column,
    Trigger,
    Function,
    Policy,
    PgType,
)

__all__ = [
    # Contracts
    "TriggerTiming",
    "TriggerOrientation",
    "EnableMode",
    "DeferrableMode",
    # Results
    "ErrorKind",
    "MetaError",
    "MetaResult",
    "MetaResultError",
    # Models
    "Schema",
    "Table",
    "Column",
    "Trigger",
    "Function",
    "Policy",
    "PgType",
]
