# ============================================================================
# SCHEMA MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - DDL statement composition
# PURPOSE: Quoting, name resolution and per-resource DDL builders
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================

from core.schema.quoting import (
    identifier,
    literal,
    fragment,
    as_text,
    quote_ident,
    quote_literal,
    quote_string_expr,
    quote_qualified,
)
from core.schema.names import (
    QualifiedName,
    split_qualified_name,
    resolve_qualified,
    resolved_identifier,
)
from core.schema.statements import MissingRequiredParam, StatementBatch
from core.schema.schema_ddl import SchemaBuilder
from core.schema.table_ddl import TableBuilder
from core.schema.column_ddl import ColumnBuilder
from core.schema.trigger_ddl import TriggerBuilder
from core.schema.policy_ddl import PolicyBuilder
from core.schema.function_ddl import FunctionBuilder

__all__ = [
    # Quoting
    "identifier",
    "literal",
    "fragment",
    "as_text",
    "quote_ident",
    "quote_literal",
    "quote_string_expr",
    "quote_qualified",
    # Names
    "QualifiedName",
    "split_qualified_name",
    "resolve_qualified",
    "resolved_identifier",
    # Batches
    "MissingRequiredParam",
    "StatementBatch",
    # Builders
    "SchemaBuilder",
    "TableBuilder",
    "ColumnBuilder",
    "TriggerBuilder",
    "PolicyBuilder",
    "FunctionBuilder",
]
