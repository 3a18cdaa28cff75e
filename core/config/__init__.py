# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the metadata service.
"""

from core.config.defaults import (
    DatabaseDefaults,
    ServerDefaults,
    TypegenDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "DatabaseDefaults",
    "ServerDefaults",
    "TypegenDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
