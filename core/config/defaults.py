# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for database, server and type generation
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Configuration Defaults

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access

Environment:
    PG_META_DB_URL / DATABASE_URL            connection string
    PG_META_DB_POOL_MIN / PG_META_DB_POOL_MAX
    PG_META_DB_STATEMENT_TIMEOUT_MS
    PG_META_HOST / PG_META_PORT
    LOG_LEVEL / LOG_FORMAT
    PG_META_GENERATE_TYPES_INCLUDED_SCHEMAS  comma-separated
    PG_META_GENERATE_TYPES_EXCLUDED_SCHEMAS  comma-separated
    PG_META_GENERATE_TYPES_MAX_DEPTH
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from core.typegen.projector import DEFAULT_MAX_DEPTH


def _csv_env(name: str, default: Tuple[str, ...] = ()) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class DatabaseDefaults:
    """
    Defaults for the connection pool.

    An empty connection_string means repositories.database builds one from
    the POSTGRES_* variables.
    """
    connection_string: str = ""
    pool_min_size: int = 1
    pool_max_size: int = 10
    statement_timeout_ms: Optional[int] = None

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        timeout = os.getenv("PG_META_DB_STATEMENT_TIMEOUT_MS")
        return cls(
            connection_string=os.getenv("PG_META_DB_URL") or os.getenv("DATABASE_URL", ""),
            pool_min_size=int(os.getenv("PG_META_DB_POOL_MIN", 1)),
            pool_max_size=int(os.getenv("PG_META_DB_POOL_MAX", 10)),
            statement_timeout_ms=int(timeout) if timeout else None,
        )


@dataclass(frozen=True)
class ServerDefaults:
    """Defaults for the HTTP server and logging."""
    host: str = "0.0.0.0"
    port: int = 1337
    log_level: str = "INFO"
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "ServerDefaults":
        """Create from environment variables."""
        return cls(
            host=os.getenv("PG_META_HOST", "0.0.0.0"),
            port=int(os.getenv("PG_META_PORT", 1337)),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            json_logs=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


@dataclass(frozen=True)
class TypegenDefaults:
    """
    Defaults for TypeScript type generation.

    included_schemas empty means every schema not excluded.
    """
    included_schemas: Tuple[str, ...] = ()
    excluded_schemas: Tuple[str, ...] = ()
    max_depth: int = DEFAULT_MAX_DEPTH

    @classmethod
    def from_env(cls) -> "TypegenDefaults":
        """Create from environment variables."""
        return cls(
            included_schemas=_csv_env("PG_META_GENERATE_TYPES_INCLUDED_SCHEMAS"),
            excluded_schemas=_csv_env("PG_META_GENERATE_TYPES_EXCLUDED_SCHEMAS"),
            max_depth=int(os.getenv("PG_META_GENERATE_TYPES_MAX_DEPTH", DEFAULT_MAX_DEPTH)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)
    server: ServerDefaults = field(default_factory=ServerDefaults)
    typegen: TypegenDefaults = field(default_factory=TypegenDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            database=DatabaseDefaults.from_env(),
            server=ServerDefaults.from_env(),
            typegen=TypegenDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DatabaseDefaults",
    "ServerDefaults",
    "TypegenDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
