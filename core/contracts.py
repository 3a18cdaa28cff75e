# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Foundation - Option enums shared by builders and models
# PURPOSE: Decide loosely-typed option strings once, at the boundary
# LAST_REVIEWED: 16 OCT 2026
# EXPORTS: TriggerTiming, TriggerOrientation, EnableMode, DeferrableMode, ...
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the schema metadata service.

Every option that callers send as a free-form string ("before", "row",
"replica", "deferrable initially deferred", ...) is parsed into one of these
enums when the request is validated. Builders only ever see enum members, so
nothing downstream re-parses string literals.

Values are matched case-insensitively and with surrounding whitespace
ignored: "BEFORE", "before" and " Before " all map to TriggerTiming.BEFORE.
"""

from enum import Enum


class _OptionEnum(str, Enum):
    """str-valued enum with case-insensitive lookup."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = " ".join(value.strip().lower().replace("_", " ").split())
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def keyword(self) -> str:
        """SQL keyword form of the value."""
        return self.value.upper()


# ============================================================================
# TRIGGERS
# ============================================================================

class TriggerTiming(_OptionEnum):
    """When the trigger function fires relative to the event."""
    BEFORE = "before"
    AFTER = "after"
    INSTEAD_OF = "instead of"


class TriggerOrientation(_OptionEnum):
    """Once per affected row or once per statement."""
    ROW = "row"
    STATEMENT = "statement"


class EnableMode(_OptionEnum):
    """
    Replication mode used when enabling a trigger.

    Absence (None) means plain ENABLE, which fires in origin/local sessions.
    """
    REPLICA = "replica"
    ALWAYS = "always"


class TriggerEnabledMode(_OptionEnum):
    """Trigger state as reported by the catalog (pg_trigger.tgenabled)."""
    ORIGIN = "origin"
    REPLICA = "replica"
    ALWAYS = "always"
    DISABLED = "disabled"


class DeferrableMode(_OptionEnum):
    """Deferrability clause for constraint triggers."""
    NOT_DEFERRABLE = "not deferrable"
    DEFERRABLE = "deferrable"
    DEFERRABLE_INITIALLY_IMMEDIATE = "deferrable initially immediate"
    DEFERRABLE_INITIALLY_DEFERRED = "deferrable initially deferred"


# ============================================================================
# TABLES & COLUMNS
# ============================================================================

class ReplicaIdentity(_OptionEnum):
    DEFAULT = "default"
    INDEX = "index"
    FULL = "full"
    NOTHING = "nothing"


class IdentityGeneration(_OptionEnum):
    """Identity column generation (GENERATED ... AS IDENTITY)."""
    BY_DEFAULT = "by default"
    ALWAYS = "always"


class DefaultValueFormat(_OptionEnum):
    """How a column default is rendered: quoted literal or raw expression."""
    LITERAL = "literal"
    EXPRESSION = "expression"


# ============================================================================
# POLICIES
# ============================================================================

class PolicyAction(_OptionEnum):
    PERMISSIVE = "permissive"
    RESTRICTIVE = "restrictive"


class PolicyCommand(_OptionEnum):
    ALL = "all"
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


# ============================================================================
# FUNCTIONS
# ============================================================================

class FunctionBehavior(_OptionEnum):
    """Volatility category."""
    IMMUTABLE = "immutable"
    STABLE = "stable"
    VOLATILE = "volatile"


__all__ = [
    "TriggerTiming",
    "TriggerOrientation",
    "EnableMode",
    "TriggerEnabledMode",
    "DeferrableMode",
    "ReplicaIdentity",
    "IdentityGeneration",
    "DefaultValueFormat",
    "PolicyAction",
    "PolicyCommand",
    "FunctionBehavior",
]
